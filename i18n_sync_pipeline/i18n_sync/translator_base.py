from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class ChunkResult:
    """Outcome of one remote call: translations on success, a reason on failure."""
    translations: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, translations: Dict[str, str]) -> "ChunkResult":
        return cls(dict(translations))

    @classmethod
    def failed(cls, reason: str) -> "ChunkResult":
        return cls({}, reason)


class Translator(ABC):
    @abstractmethod
    def translate(self, source_locale: str, target_locale: str, context: str, tone: str,
                  chunk: Dict[str, str]) -> ChunkResult:
        ...
