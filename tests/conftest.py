from __future__ import annotations
import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from i18n_sync.translator_base import ChunkResult, Translator

T0 = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)
T1 = datetime(2025, 1, 16, 10, 0, 0, tzinfo=timezone.utc)
T2 = datetime(2025, 1, 17, 10, 0, 0, tzinfo=timezone.utc)


class Project:
    def __init__(self, root: Path):
        self.root = root
        self.translations = root / "translations"
        self.state_path = str(root / "state.json")

    def write(self, locale: str, file_name: str, content) -> Path:
        path = self.translations / locale / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    def read(self, locale: str, file_name: str):
        return json.loads((self.translations / locale / file_name).read_text(encoding="utf-8"))

    def state_json(self):
        return json.loads(Path(self.state_path).read_text(encoding="utf-8"))


@pytest.fixture
def project(tmp_path, monkeypatch) -> Project:
    monkeypatch.chdir(tmp_path)
    return Project(tmp_path)


class FakeTranslator(Translator):
    """Uppercases values with a locale prefix unless told otherwise."""

    def __init__(self, responses: Optional[Dict[str, Dict[str, str]]] = None, fail_on: Optional[List[int]] = None):
        self.responses = responses or {}
        self.fail_on = set(fail_on or [])
        self.calls: List[dict] = []
        self._lock = threading.Lock()

    def translate(self, source_locale, target_locale, context, tone, chunk):
        with self._lock:
            index = len(self.calls)
            self.calls.append({
                "source": source_locale, "target": target_locale,
                "context": context, "tone": tone, "chunk": dict(chunk),
            })
        if index in self.fail_on:
            return ChunkResult.failed("boom")
        canned = self.responses.get(target_locale)
        if canned is not None:
            return ChunkResult.success({k: v for k, v in canned.items() if k in chunk})
        return ChunkResult.success({k: f"[{target_locale}] {v}" for k, v in chunk.items()})


@pytest.fixture
def fake_translator() -> FakeTranslator:
    return FakeTranslator()
