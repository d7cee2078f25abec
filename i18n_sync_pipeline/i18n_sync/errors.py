# i18n_sync/errors.py
from __future__ import annotations


class I18nSyncError(Exception):
    """Base class for conditions the CLI reports as exit code 1."""


class MissingStateError(I18nSyncError):
    def __init__(self, state_path: str) -> None:
        super().__init__(f"No state found at {state_path}. Run `i18n-sync init` first.")
        self.state_path = state_path


class StateFormatError(I18nSyncError):
    def __init__(self, state_path: str, detail: str) -> None:
        super().__init__(f"Invalid state document {state_path}: {detail}")
        self.state_path = state_path


class MissingConfigError(I18nSyncError):
    pass


class ContextFileError(I18nSyncError):
    pass


class TranslationFileError(I18nSyncError):
    """Malformed translation JSON; carries the offending path."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid translation file {path}: {detail}")
        self.path = path
