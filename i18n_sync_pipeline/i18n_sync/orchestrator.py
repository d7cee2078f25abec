# i18n_sync/orchestrator.py
"""
Fill missing or changed translations through a remote translator.

For every target locale and every base-locale file the work set is chunked and
sent one chunk at a time; locales run concurrently. A chunk that fails adds
nothing and is picked up again on the next run, because the work set is always
recomputed from file content. State is touched for a key only after the file
holding its translation has been written.
"""
from __future__ import annotations
import asyncio
import copy
import logging
import os
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .config import TranslateConfig
from .errors import MissingConfigError, MissingStateError, TranslationFileError
from .fileio import list_json_files, read_json, read_json_or_empty, write_json
from .flatten import Path, has_path, leaf_paths, namespace_of, set_path
from .formatting import FormatOptions
from .logger import get_logger
from .reconcile import translations_root
from .state import State, diff_state, load_state, save_state, touch, utcnow
from .translator_base import ChunkResult, Translator
from .translator_openai import OpenAITranslator
from .validators import validate_translations


@dataclass
class FileReport:
    locale: str
    file: str
    requested: int = 0
    added: int = 0
    failed_chunks: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class TranslationRun:
    files: List[FileReport] = field(default_factory=list)

    @property
    def keys_added(self) -> int:
        return sum(f.added for f in self.files)

    @property
    def failed_chunks(self) -> int:
        return sum(len(f.failed_chunks) for f in self.files)

    @property
    def errors(self) -> List[FileReport]:
        return [f for f in self.files if f.error]

    def added_by_locale(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for f in self.files:
            out[f.locale] = out.get(f.locale, 0) + f.added
        return out


def split_into_chunks(items: Dict[str, str], chunk_size: int) -> List[Dict[str, str]]:
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    keys = list(items)
    return [{k: items[k] for k in keys[i:i + chunk_size]} for i in range(0, len(keys), chunk_size)]


def select_work(base_content: Dict[str, Any], existing: Dict[str, Any], update_all: bool) -> Dict[Path, str]:
    """
    path -> base text for every leaf to send. Selective mode keeps only leaves
    whose path is absent from the target file.
    """
    work: Dict[Path, str] = {}
    for path, text in leaf_paths(base_content):
        if update_all or not has_path(existing, path):
            work[path] = text
    return work


def request_keys(paths: List[Path]) -> Dict[str, Path]:
    """
    Dotted request key -> path. A literal "a.b" key and a nested a -> b both
    join to "a.b"; later ones get a "#n" suffix so neither is lost.
    """
    out: Dict[str, Path] = {}
    for path in paths:
        key = base_key = ".".join(path)
        n = 2
        while key in out:
            key = f"{base_key}#{n}"
            n += 1
        out[key] = path
    return out


def log_stats(state: State, logger: logging.Logger) -> Dict[str, int]:
    counts = Counter(d.locale for d in diff_state(state))
    logger.info("Stale translations by locale:")
    for code in state.target_codes():
        logger.info(f"  {code}: {counts.get(code, 0)} stale keys")
    return dict(counts)


class TranslationOrchestrator:
    def __init__(self, state: State, cfg: TranslateConfig, translator: Translator, root: Optional[str] = None,
                 format_options: Optional[FormatOptions] = None, logger: Optional[logging.Logger] = None):
        self.state = state
        self.cfg = cfg
        self.translator = translator
        self.translations_path = translations_root(state, root)
        self.format_options = format_options
        self.logger = logger or get_logger()

    # ---------------- public API ----------------

    def run(self) -> TranslationRun:
        return asyncio.run(self.run_async())

    async def run_async(self) -> TranslationRun:
        base = self.state.base_locale
        base_path = os.path.join(self.translations_path, base)
        # base files are read up front; a malformed one stops the run before any call
        base_files = {name: read_json(os.path.join(base_path, name)) for name in list_json_files(base_path)}

        targets = self.state.target_codes()
        reports = await asyncio.gather(*(self._translate_locale(code, base_files) for code in targets))
        run = TranslationRun([r for locale_reports in reports for r in locale_reports])
        for locale, added in run.added_by_locale().items():
            self.logger.info(f"{locale}: {added} key(s) added")
        return run

    # ---------------- internals ----------------

    async def _translate_locale(self, locale: str, base_files: Dict[str, Dict[str, Any]]) -> List[FileReport]:
        reports = []
        for file_name, base_content in base_files.items():
            report = FileReport(locale=locale, file=file_name)
            try:
                await self._translate_file(report, base_content)
            except TranslationFileError as e:
                report.error = str(e)
                self.logger.error(f"Skipping {file_name} for {locale}: {e}")
            reports.append(report)
        return reports

    async def _translate_chunk(self, locale: str, chunk: Dict[str, str]) -> ChunkResult:
        return await asyncio.to_thread(
            self.translator.translate,
            self.state.base_locale, locale, self.cfg.context, self.cfg.tone, chunk,
        )

    async def _translate_file(self, report: FileReport, base_content: Dict[str, Any]) -> None:
        locale, file_name = report.locale, report.file
        target_path = os.path.join(self.translations_path, locale, file_name)
        existing = read_json_or_empty(target_path)
        work = select_work(base_content, existing, self.cfg.update_all)
        report.requested = len(work)
        if not work:
            self.logger.debug(f"{file_name} is complete for {locale}")
            return

        self.logger.info(f"Translating {file_name} to {locale}")
        paths = request_keys(list(work))
        source = {k: work[path] for k, path in paths.items()}
        translated: Dict[str, str] = {}
        for i, chunk in enumerate(split_into_chunks(source, self.cfg.chunk_size)):
            result = await self._translate_chunk(locale, chunk)
            if not result.ok:
                report.failed_chunks.append(result.error or "")
                self.logger.warning(f"Translation failed for {file_name} chunk {i} ({locale}): {result.error}")
                continue
            translated.update({k: v for k, v in result.translations.items() if k in chunk})

        if not translated:
            return

        for issue in validate_translations(source, translated, locale):
            self.logger.warning(f"[{locale}] {namespace_of(file_name)}.{issue.key}: {issue.detail}")

        self._commit(report, existing, paths, translated)

    def _commit(self, report: FileReport, existing: Dict[str, Any], paths: Dict[str, Path],
                translated: Dict[str, str], now: Optional[datetime] = None) -> None:
        merged = copy.deepcopy(existing)
        for key, text in translated.items():
            set_path(merged, paths[key], text)
        target_path = os.path.join(self.translations_path, report.locale, report.file)
        write_json(target_path, merged, self.format_options)

        # only after the write is durable
        now = now or utcnow()
        namespace = namespace_of(report.file)
        for key in translated:
            touch(self.state, report.locale, f"{namespace}.{'.'.join(paths[key])}", now)
        report.added = len(translated)
        self.logger.info(f"Finished translating {report.file} for {report.locale}. {report.added} keys added")


def save_ai_translations(state_path: str, cfg: TranslateConfig, translator: Optional[Translator] = None,
                         root: Optional[str] = None, format_options: Optional[FormatOptions] = None,
                         logger: Optional[logging.Logger] = None) -> TranslationRun:
    """Translate every missing key and commit State once at the end."""
    if not cfg.api_url or not cfg.api_key:
        raise MissingConfigError("Missing required parameters: apiUrl or apiKey")
    logger = logger or get_logger()
    state = load_state(state_path)
    if state is None:
        raise MissingStateError(state_path)

    if cfg.stats:
        log_stats(state, logger)

    if translator is None:
        translator = OpenAITranslator(cfg, logger=logger)

    run = TranslationOrchestrator(state, cfg, translator, root=root, format_options=format_options, logger=logger).run()
    save_state(state_path, state)
    return run
