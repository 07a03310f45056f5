"""
Error handling for locale-sync.

- Fatal errors (configuration, base locale, report output) abort the run
- Per-locale errors are recorded in the reconciliation report
"""

from .exceptions import (
    LocaleSyncError,
    TemporaryError,
    PermanentError,
    ConfigurationError,
    BaseLocaleError,
    LocaleFileError,
    OutputWriteError,
    StructuralConflictError,
    BatchAlignmentError,
    TranslationProviderError,
)

__all__ = [
    "LocaleSyncError",
    "TemporaryError",
    "PermanentError",
    "ConfigurationError",
    "BaseLocaleError",
    "LocaleFileError",
    "OutputWriteError",
    "StructuralConflictError",
    "BatchAlignmentError",
    "TranslationProviderError",
]
