# i18n_sync/keys_ts.py
from __future__ import annotations
import json
import os
import re
from typing import Any, Dict, List, Optional

from .fileio import list_json_files, read_json, write_file
from .flatten import flatten_content, namespace_of
from .formatting import FormatOptions, format_text
from .state import State, format_timestamp, get_languages_info, utcnow

PARAM_RE = re.compile(r"{{(\w+)}}")
OUTPUT_FILE = "translation.ts"


def unique(items: List[str]) -> List[str]:
    seen, out = set(), []
    for s in items:
        if s not in seen:
            seen.add(s); out.append(s)
    return out


def extract_parameters(text: str) -> List[str]:
    return PARAM_RE.findall(text)


def collect_keys(translations: Dict[str, Dict[str, Any]]) -> Dict[str, List[str]]:
    """`<namespace>:<dot.path>` -> parameter names, across every file."""
    keys: Dict[str, List[str]] = {}
    for file_name, content in translations.items():
        namespace = namespace_of(file_name)
        for entry in flatten_content(content, namespace):
            path = entry.key[len(namespace) + 1:]
            keys[f"{namespace}:{path}"] = extract_parameters(entry.value)
    return keys


def _quote(s: str) -> str:
    return "'" + s.replace("\\", "\\\\").replace("'", "\\'") + "'"


def generate_keys(
    languages: List[Dict[str, str]],
    translations: Dict[str, Dict[str, Any]],
    default_locale: str,
    options: Optional[FormatOptions] = None,
    generated_at: Optional[str] = None,
) -> str:
    options = options or FormatOptions()
    ind = options.indent
    namespaces = [namespace_of(f) for f in translations]
    simple: List[str] = []
    parameterized: Dict[str, List[str]] = {}
    for key, params in collect_keys(translations).items():
        if params:
            parameterized[key] = unique(params)
        else:
            simple.append(key)

    codes = [lng["code"] for lng in languages]
    iso1 = ", ".join(f"{_quote(c.split('-')[0])}: {_quote(c)}" for c in codes)
    with_options = [
        f"{ind}{_quote(key)}: {{ "
        + ", ".join(f"{_quote(p)}: {'number' if p == 'count' else 'string'}" for p in params)
        + " };"
        for key, params in parameterized.items()
    ]

    lines = [
        f"// This file was autogenerated on {generated_at or format_timestamp(utcnow())}.",
        "// DO NOT EDIT THIS FILE.",
        "",
        f"export const locales = [{', '.join(_quote(c) for c in codes)}] as const;",
        "export type Locale = (typeof locales)[number];",
        f"export const defaultLocale: Locale = {_quote(default_locale)};",
        "",
        f"export const iso1ToLocale: {{ [key: string]: Locale }} = {{ {iso1} }};",
        "",
        "export const languages: Array<{ code: Locale; englishName: string; localName: string }> = "
        + json.dumps(languages, ensure_ascii=False) + ";",
        "",
        f"export type Namespace = {' | '.join(_quote(n) for n in namespaces) or 'never'};",
        f"export const namespaces: Namespace[] = [{', '.join(_quote(n) for n in namespaces)}];",
        "",
        f"export type TranslationKeyWithoutOptions = {' | '.join(_quote(k) for k in simple) or 'never'};",
        "export type TranslationWithOptions = {",
        *with_options,
        "};",
        "type TranslationKeyWithOptions = keyof TranslationWithOptions;",
        "",
        "export type TranslationKey =",
        f"{ind}| TranslationKeyWithoutOptions",
        f"{ind}| TranslationKeyWithOptions;",
        "export type Translator = {",
        f"{ind}(key: TranslationKeyWithoutOptions, options?: {{ count: number }}): string;",
        f"{ind}<T extends TranslationKeyWithOptions>(",
        f"{ind}{ind}key: T,",
        f"{ind}{ind}options: TranslationWithOptions[T] & {{ count?: number }},",
        f"{ind}): string;",
        "};",
    ]
    return format_text("\n".join(lines), options, parser="typescript")


def save_keys(state: State, root: Optional[str] = None, output_dir: Optional[str] = None,
              options: Optional[FormatOptions] = None) -> str:
    """Write translation.ts for the base locale; returns the written path."""
    translations_path = os.path.join(root or os.getcwd(), state.translations_path)
    base_path = os.path.join(translations_path, state.base_locale)
    translations = {name: read_json(os.path.join(base_path, name)) for name in list_json_files(base_path)}
    content = generate_keys(get_languages_info(state), translations, state.base_locale, options)
    out_path = os.path.join(output_dir or translations_path, OUTPUT_FILE)
    write_file(out_path, content)
    return out_path
