"""Result types for a reconciliation run."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from locale_sync.errors import LocaleSyncError


class ResultStatus(Enum):
    """Outcome of one locale."""
    FILLED = "filled"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class ReconciliationResult:
    """What happened to one target locale"""
    locale: str
    status: ResultStatus
    translations: Dict[str, Any] = field(default_factory=dict)
    output_path: Optional[Path] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def keys_filled(self) -> int:
        return len(self.translations)

    @property
    def succeeded(self) -> bool:
        return self.status is not ResultStatus.FAILED

    @classmethod
    def filled(cls, locale: str, translations: Dict[str, Any], output_path: Path) -> "ReconciliationResult":
        return cls(locale, ResultStatus.FILLED, dict(translations), output_path)

    @classmethod
    def complete(cls, locale: str) -> "ReconciliationResult":
        return cls(locale, ResultStatus.COMPLETE)

    @classmethod
    def failed(cls, locale: str, error: LocaleSyncError) -> "ReconciliationResult":
        return cls(locale, ResultStatus.FAILED, error=error.to_dict())

    def describe(self) -> str:
        """One-line human summary."""
        if self.status is ResultStatus.FILLED:
            return f"{self.keys_filled} key(s) filled"
        if self.status is ResultStatus.COMPLETE:
            return "already complete"
        return f"failed: {self.error['message']}" if self.error else "failed"


@dataclass
class ReconciliationReport:
    """All results of one run, one entry per requested locale"""
    base_locale: str
    replace_original: bool
    results: List[ReconciliationResult] = field(default_factory=list)

    @property
    def failures(self) -> List[ReconciliationResult]:
        return [result for result in self.results if not result.succeeded]

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def keys_filled(self) -> int:
        return sum(result.keys_filled for result in self.results)

    def get(self, locale: str) -> Optional[ReconciliationResult]:
        for result in self.results:
            if result.locale == locale:
                return result
        return None
