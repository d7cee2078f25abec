# i18n_sync/formatting.py
from __future__ import annotations
import json
import os
import re
from dataclasses import dataclass
from typing import Optional

import yaml

RC_FILE_NAMES = (".prettierrc", ".prettierrc.json", ".prettierrc.yaml", ".prettierrc.yml")

BLANK_RUN_RE = re.compile(r"\n{3,}")


@dataclass
class FormatOptions:
    tab_width: int = 2
    use_tabs: bool = False

    @property
    def indent(self) -> str:
        return "\t" if self.use_tabs else " " * self.tab_width


def resolve_format_options(config_path: Optional[str] = None) -> FormatOptions:
    """
    Read tabWidth/useTabs from a prettier rc file. `config_path` may be the rc
    file itself or a directory to look in; defaults to the working directory.
    rc files are JSON or YAML, both of which yaml.safe_load understands.
    """
    path = config_path or os.getcwd()
    if os.path.isdir(path):
        candidates = [os.path.join(path, n) for n in RC_FILE_NAMES]
        path = next((c for c in candidates if os.path.isfile(c)), "")
    if not path or not os.path.isfile(path):
        return FormatOptions()
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        return FormatOptions()
    return FormatOptions(
        tab_width=int(data.get("tabWidth", 2)),
        use_tabs=bool(data.get("useTabs", False)),
    )


def format_text(text: str, options: Optional[FormatOptions] = None, parser: str = "json") -> str:
    options = options or FormatOptions()
    if parser == "json":
        data = json.loads(text)
        return json.dumps(data, ensure_ascii=False, indent=options.indent) + "\n"
    if parser == "typescript":
        lines = [line.rstrip() for line in text.replace("\r\n", "\n").split("\n")]
        out = BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip("\n")
        return out + "\n"
    raise ValueError(f"Unsupported parser: {parser}")
