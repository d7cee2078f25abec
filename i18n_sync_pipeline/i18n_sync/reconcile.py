# i18n_sync/reconcile.py
"""
Bring the State document in line with what is on disk in the base locale.

`reconcile` only mutates the in-memory State; `sync_state` and
`initialize_state` own loading, committing and reporting.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from .errors import I18nSyncError, MissingStateError
from .fileio import list_json_files, list_locale_dirs, read_json
from .flatten import flatten_content, namespace_of
from .formatting import FormatOptions
from .keys_ts import save_keys
from .logger import get_logger
from .state import (
    State, StaleEntry, create_state, diff_state, ensure_locale, load_state,
    remove_key, save_state, touch, utcnow,
)


@dataclass
class SyncResult:
    added: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    new_locales: List[str] = field(default_factory=list)
    owed: Dict[str, List[str]] = field(default_factory=dict)
    missing_files: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.removed or self.new_locales or self.owed)


def translations_root(state: State, root: Optional[str] = None) -> str:
    return os.path.join(root or os.getcwd(), state.translations_path)


def read_base_entries(base_path: str) -> Tuple[List[str], Dict[str, str]]:
    """
    Base-locale file names plus flattened key -> value over all of them, in
    file then key order. A missing base directory is created and reads as empty.
    """
    files = list_json_files(base_path)
    current: Dict[str, str] = {}
    for file_name in files:
        content = read_json(os.path.join(base_path, file_name))
        for entry in flatten_content(content, namespace_of(file_name)):
            current[entry.key] = entry.value
    return files, current


def reconcile_state(state: State, root: Optional[str] = None, now: Optional[datetime] = None,
              logger: Optional[logging.Logger] = None) -> SyncResult:
    logger = logger or get_logger()
    now = now or utcnow()
    result = SyncResult()
    base = state.base_locale
    translations_path = translations_root(state, root)
    base_path = os.path.join(translations_path, base)

    # 1-2. base keys: new ones are added, changed ones updated
    base_files, current = read_base_entries(base_path)
    for key, value in current.items():
        base_entry = state.base_entry
        existing = base_entry.keys.get(key) if base_entry else None
        if existing is None:
            touch(state, base, key, now, value)
            result.added.append(key)
        elif value and existing.current != value:
            # an emptied base string is not propagated as an update
            touch(state, base, key, now, value)
            result.updated.append(key)

    # 3. keys gone from the base files are dead in every locale
    base_entry = state.base_entry
    removed = [k for k in (base_entry.keys if base_entry else {}) if k not in current]
    for key in removed:
        remove_key(state, key)
    result.removed = removed
    removed_set = set(removed)

    # 4. new locales and owed keys
    tracked = {loc.code for loc in state.locales}
    for code in list_locale_dirs(translations_path):
        if code == base or code in tracked:
            continue
        ensure_locale(state, code)
        result.new_locales.append(code)
        logger.info(f"Found new language: {code}")

    base_keys = list(state.base_entry.keys) if state.base_entry else []
    for code in state.target_codes():
        locale_path = os.path.join(translations_path, code)
        try:
            locale_files = list_json_files(locale_path, create=False)
        except OSError as e:
            logger.warning(f"Could not read translations for {code}: {e}")
            locale_files = []
        missing = [f for f in base_files if f not in locale_files]
        if missing:
            result.missing_files[code] = missing
            for f in missing:
                logger.info(f"Missing file {f} in language {code}")

        entry = ensure_locale(state, code)
        for key in base_keys:
            if key in removed_set or key in entry.keys:
                continue
            touch(state, code, key, now)
            result.owed.setdefault(code, []).append(key)

    return result


def log_sync_result(result: SyncResult, logger: logging.Logger) -> None:
    if result.added:
        logger.info(f"Initialized {len(result.added)} new untracked key(s)")
    for key in result.updated:
        logger.info(f"Updated key {key} in base locale")
    for key in result.removed:
        logger.info(f"Removed obsolete key {key} from all locales")
    if result.new_locales:
        logger.info(f"Initialized new languages: {', '.join(result.new_locales)}")
    for code, keys in result.owed.items():
        logger.info(f"Tracking {len(keys)} untranslated key(s) for {code}")


def report_diffs(diffs: List[StaleEntry], logger: Optional[logging.Logger] = None) -> int:
    """Log the stale report; exit code 0 when clean, 1 otherwise."""
    logger = logger or get_logger()
    if not diffs:
        logger.info("All translations are up to date.")
        return 0
    logger.info("Found stale translations:")
    for d in diffs:
        logger.info(f"[{d.locale}] {d.key}: base={d.base_ts}, locale={d.locale_ts}")
    return 1


def initialize_state(state_path: str, translations_path: str, base_locale: str, generate_keys: bool = True,
                     root: Optional[str] = None, now: Optional[datetime] = None,
                     logger: Optional[logging.Logger] = None) -> bool:
    """Create the State document from a scan of the base locale. Returns False if one already exists."""
    logger = logger or get_logger()
    if load_state(state_path) is not None:
        logger.info("State already exists for this project")
        return False

    now = now or utcnow()
    state = create_state(base_locale, translations_path, generate_keys)
    full_path = translations_root(state, root)
    others = [c for c in list_locale_dirs(full_path) if c != base_locale]

    ensure_locale(state, base_locale)
    for code in others:
        ensure_locale(state, code)
    _, current = read_base_entries(os.path.join(full_path, base_locale))
    for key, value in current.items():
        touch(state, base_locale, key, now, value)
        for code in others:
            touch(state, code, key, now)

    save_state(state_path, state)
    logger.info(f"Initialized state tracking for {base_locale}")
    return True


def sync_state(state_path: str, root: Optional[str] = None, now: Optional[datetime] = None,
               keys_output: Optional[str] = None, format_options: Optional[FormatOptions] = None,
               logger: Optional[logging.Logger] = None) -> int:
    logger = logger or get_logger()
    state = load_state(state_path)
    if state is None:
        raise MissingStateError(state_path)

    result = reconcile_state(state, root=root, now=now, logger=logger)
    if result.changed:
        save_state(state_path, state)
        log_sync_result(result, logger)

    if state.generate_keys:
        try:
            out = save_keys(state, root=root, output_dir=keys_output, options=format_options)
            logger.info(f"Generated {out}")
        except (OSError, I18nSyncError) as e:
            logger.warning(f"Could not generate translation keys: {e}")

    return report_diffs(diff_state(state), logger)


def check_status(state_path: str, logger: Optional[logging.Logger] = None) -> int:
    logger = logger or get_logger()
    state = load_state(state_path)
    if state is None:
        raise MissingStateError(state_path)
    return report_diffs(diff_state(state), logger)
