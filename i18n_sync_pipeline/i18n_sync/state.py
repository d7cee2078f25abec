# i18n_sync/state.py
"""
The persisted freshness model.

A State is one JSON document listing every tracked locale and, per locale, the
namespaced keys it knows about together with the time each one last changed.
The base locale's entry decides which keys exist; other locales are compared
against it by timestamp.
"""
from __future__ import annotations
import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .errors import StateFormatError
from .languages import language_names

STATE_VERSION = "0"
MISSING = "missing"


@dataclass
class KeyMeta:
    last_modified: str
    current: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        out = {"lastModified": self.last_modified}
        if self.current is not None:
            out["current"] = self.current
        return out


@dataclass
class LocaleEntry:
    code: str
    english_name: str = ""
    local_name: str = ""
    keys: Dict[str, KeyMeta] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "englishName": self.english_name,
            "localName": self.local_name,
            "keys": {k: m.to_dict() for k, m in self.keys.items()},
        }


@dataclass
class State:
    base_locale: str
    translations_path: str
    locales: List[LocaleEntry] = field(default_factory=list)
    version: str = STATE_VERSION
    generate_keys: bool = True

    def find_locale(self, code: str) -> Optional[LocaleEntry]:
        return next((loc for loc in self.locales if loc.code == code), None)

    @property
    def base_entry(self) -> Optional[LocaleEntry]:
        return self.find_locale(self.base_locale)

    def target_codes(self) -> List[str]:
        return [loc.code for loc in self.locales if loc.code != self.base_locale]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "baseLocale": self.base_locale,
            "translationsPath": self.translations_path,
            "generateKeys": self.generate_keys,
            "locales": [loc.to_dict() for loc in self.locales],
        }


@dataclass(frozen=True)
class StaleEntry:
    locale: str
    key: str
    base_ts: str
    locale_ts: str  # timestamp or MISSING


def format_timestamp(date: datetime) -> str:
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    date = date.astimezone(timezone.utc)
    return date.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------- (de)serialization ----------------

def _require(data: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in data:
        raise ValueError(f"missing '{key}' in {where}")
    value = data[key]
    if not isinstance(value, kind):
        raise ValueError(f"'{key}' in {where} must be {kind.__name__}")
    return value


def state_from_dict(data: Any) -> State:
    if not isinstance(data, dict):
        raise ValueError("state must be a JSON object")
    version = _require(data, "version", str, "state")
    if version != STATE_VERSION:
        raise ValueError(f"unsupported version {version!r}")
    locales: List[LocaleEntry] = []
    for i, raw in enumerate(_require(data, "locales", list, "state")):
        where = f"locales[{i}]"
        if not isinstance(raw, dict):
            raise ValueError(f"{where} must be an object")
        keys: Dict[str, KeyMeta] = {}
        for key, meta in _require(raw, "keys", dict, where).items():
            if not isinstance(meta, dict):
                raise ValueError(f"{where}.keys[{key!r}] must be an object")
            current = meta.get("current")
            if current is not None and not isinstance(current, str):
                raise ValueError(f"{where}.keys[{key!r}].current must be str")
            keys[key] = KeyMeta(_require(meta, "lastModified", str, f"{where}.keys[{key!r}]"), current)
        locales.append(LocaleEntry(
            code=_require(raw, "code", str, where),
            english_name=_require(raw, "englishName", str, where),
            local_name=_require(raw, "localName", str, where),
            keys=keys,
        ))
    generate_keys = data.get("generateKeys", True)
    return State(
        base_locale=_require(data, "baseLocale", str, "state"),
        translations_path=_require(data, "translationsPath", str, "state"),
        locales=locales,
        version=version,
        generate_keys=bool(generate_keys),
    )


def create_state(base_locale: str, translations_path: str, generate_keys: bool = True) -> State:
    return State(base_locale=base_locale, translations_path=translations_path, generate_keys=generate_keys)


def load_state(state_path: str) -> Optional[State]:
    """Returns None when there is no state document yet."""
    try:
        with open(state_path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        return None
    try:
        return state_from_dict(json.loads(text))
    except ValueError as e:
        raise StateFormatError(state_path, str(e)) from e


def load_or_create_state(state_path: str, base_locale: str, translations_path: str) -> State:
    state = load_state(state_path)
    if state is not None:
        return state
    return create_state(base_locale, translations_path)


def save_state(state_path: str, state: State) -> None:
    parent = os.path.dirname(state_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(state_path, "w", encoding="utf-8", newline="\n") as f:
        json.dump(state.to_dict(), f, ensure_ascii=False, indent=2)
        f.write("\n")


def get_languages_info(state: State) -> List[Dict[str, str]]:
    return [
        {"code": loc.code, "englishName": loc.english_name, "localName": loc.local_name}
        for loc in state.locales
    ]


# ---------------- staleness oracle ----------------

def ensure_locale(state: State, code: str) -> LocaleEntry:
    entry = state.find_locale(code)
    if entry is None:
        english, local = language_names(code)
        entry = LocaleEntry(code=code, english_name=english, local_name=local)
        state.locales.append(entry)
    return entry


def _not_before(previous: str, stamp: str) -> str:
    # timestamps never move backwards for a (locale, key)
    return previous if parse_timestamp(previous) > parse_timestamp(stamp) else stamp


def touch(state: State, locale: str, key: str, date: Optional[datetime] = None, current: Optional[str] = None) -> None:
    """
    Record that `key` changed (or was re-confirmed) for `locale`.

    With `current` omitted only the timestamp moves. With `current` given the
    entry is updated only if the value differs from the stored one, so
    re-syncing unchanged content never makes a key look newer.
    """
    stamp = format_timestamp(date or utcnow())
    entry = ensure_locale(state, locale)
    existing = entry.keys.get(key)
    if existing is None:
        entry.keys[key] = KeyMeta(stamp, current)
        return

    if current is None:
        existing.last_modified = _not_before(existing.last_modified, stamp)
    elif existing.current != current:
        existing.current = current
        existing.last_modified = _not_before(existing.last_modified, stamp)


def is_stale(state: State, base_locale: str, locale: str, key: str) -> bool:
    base = state.find_locale(base_locale)
    base_meta = base.keys.get(key) if base else None
    if base_meta is None:
        return False
    target = state.find_locale(locale)
    target_meta = target.keys.get(key) if target else None
    if target_meta is None:
        return True
    return parse_timestamp(base_meta.last_modified) > parse_timestamp(target_meta.last_modified)


def diff_state(state: State) -> List[StaleEntry]:
    base = state.base_entry
    if base is None:
        return []
    diffs: List[StaleEntry] = []
    for entry in state.locales:
        if entry.code == state.base_locale:
            continue
        for key, meta in base.keys.items():
            if is_stale(state, state.base_locale, entry.code, key):
                target_meta = entry.keys.get(key)
                diffs.append(StaleEntry(
                    locale=entry.code,
                    key=key,
                    base_ts=meta.last_modified,
                    locale_ts=target_meta.last_modified if target_meta else MISSING,
                ))
    return diffs


def remove_key(state: State, key: str) -> None:
    for entry in state.locales:
        entry.keys.pop(key, None)
