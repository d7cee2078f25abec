# i18n_sync/config.py
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ContextFileError, MissingConfigError

DEFAULT_CONFIG_FILE = "i18n-sync.yaml"
DEFAULT_STATE_FILE = "i18n-sync-state.json"
API_URL_ENV = "OPENAI_API_URL"
API_KEY_ENV = "OPENAI_API_KEY"
CHUNK_SIZE = 100

# yaml key -> ProjectConfig field
_YAML_KEYS = {
    "translationsPath": "translations_path",
    "baseLocale": "base_locale",
    "statePath": "state_path",
    "context": "context_path",
    "tone": "tone",
    "model": "model",
    "apiUrl": "api_url",
    "logLevel": "log_level",
    "prettier": "prettier_config_path",
}


@dataclass
class ProjectConfig:
    translations_path: str = "translations"
    base_locale: str = "en-GB"
    state_path: str = DEFAULT_STATE_FILE
    context_path: Optional[str] = None
    tone: str = "formal"
    model: Optional[str] = None
    api_url: Optional[str] = None
    log_level: str = "INFO"
    prettier_config_path: Optional[str] = None


@dataclass
class TranslateConfig:
    api_url: str
    api_key: str
    model: Optional[str] = None
    context: str = ""
    tone: str = "formal"
    update_all: bool = False
    stats: bool = False
    chunk_size: int = CHUNK_SIZE
    max_retries: int = 3
    backoff_base: float = 1.5
    timeout: int = 90
    temperature: float = 1.0
    max_tokens: int = 4096
    extra_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


def load_project_config(path: Optional[str] = None) -> ProjectConfig:
    """
    Load i18n-sync.yaml. An explicit path must exist; the default file is optional.
    Unknown keys are ignored.
    """
    cfg_path = path or DEFAULT_CONFIG_FILE
    if not os.path.isfile(cfg_path):
        if path:
            raise MissingConfigError(f"Config file not found: {path}")
        return ProjectConfig()
    with open(cfg_path, "r", encoding="utf-8") as f:
        data: Any = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise MissingConfigError(f"Config file {cfg_path} must contain a mapping")
    kwargs = {_YAML_KEYS[k]: v for k, v in data.items() if k in _YAML_KEYS and v is not None}
    return ProjectConfig(**kwargs)


def resolve_api_settings(api_url: Optional[str], api_key: Optional[str]) -> Tuple[str, str]:
    """Explicit values win; environment variables are the fallback."""
    url = api_url or os.getenv(API_URL_ENV, "")
    key = api_key or os.getenv(API_KEY_ENV, "")
    if not url or not key:
        missing = [name for name, v in ((API_URL_ENV, url), (API_KEY_ENV, key)) if not v]
        raise MissingConfigError(f"Missing required parameters: {', '.join(missing)} (pass flags or set the environment variables)")
    return url, key


def load_context(path: Optional[str]) -> str:
    """Free-text context for the translator, read from a file; no path means no context."""
    if not path:
        return ""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError as e:
        raise ContextFileError(f"Error reading context file: {path}") from e
