"""
Error hierarchy for locale-sync.

Fatal errors stop the run; everything else is scoped to a single locale and
ends up as a failed entry in the report.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class LocaleSyncError(Exception):
    """
    Base exception for all locale-sync errors.

    Carries a stable error code and structured context so that a failure can
    be logged and written into the report without losing detail.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        retry_after: Optional[int] = None,
        previous_error: Optional[BaseException] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.retry_after = retry_after
        self.previous_error = previous_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "retry_after": self.retry_after,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }

    def is_retryable(self) -> bool:
        """Determine if this error should trigger a retry."""
        return isinstance(self, TemporaryError)

    def is_fatal(self) -> bool:
        """Whether the error aborts the whole run rather than one locale."""
        return isinstance(self, (ConfigurationError, BaseLocaleError, OutputWriteError))


class TemporaryError(LocaleSyncError):
    """Base class for temporary errors that should be retried."""

    def __init__(self, message: str, retry_after: int = 5, **kwargs):
        super().__init__(message, retry_after=retry_after, **kwargs)


class PermanentError(LocaleSyncError):
    """Base class for permanent errors that should not be retried."""
    pass


class ConfigurationError(PermanentError):
    """Configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(message, context={"config_key": config_key}, **kwargs)


class BaseLocaleError(PermanentError):
    """The base locale file is missing or cannot be parsed."""

    def __init__(self, message: str, path: Optional[str] = None, locale: Optional[str] = None, **kwargs):
        super().__init__(message, context={"path": path, "locale": locale}, **kwargs)


class LocaleFileError(PermanentError):
    """A target locale file is missing, unreadable or not a key tree."""

    def __init__(self, message: str, locale: Optional[str] = None, path: Optional[str] = None, **kwargs):
        super().__init__(message, context={"locale": locale, "path": path}, **kwargs)


class OutputWriteError(PermanentError):
    """The copy directory or the report cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, context={"path": path}, **kwargs)


class StructuralConflictError(PermanentError):
    """A path segment that must be an object node is occupied by something else."""

    def __init__(self, message: str, path: Optional[str] = None, segment: Optional[str] = None, **kwargs):
        super().__init__(message, context={"path": path, "segment": segment}, **kwargs)


class BatchAlignmentError(PermanentError):
    """Translations can no longer be matched to their keys by position."""

    def __init__(
        self,
        message: str,
        locale: Optional[str] = None,
        expected: Optional[int] = None,
        received: Optional[int] = None,
        key: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            context={"locale": locale, "expected": expected, "received": received, "key": key},
            **kwargs
        )


class TranslationProviderError(LocaleSyncError):
    """The external translation provider call failed."""

    def __init__(
        self,
        message: str,
        locale: Optional[str] = None,
        provider: Optional[str] = None,
        provider_error: Optional[str] = None,
        **kwargs
    ):
        # Connection problems and throttling are worth another run
        lowered = message.lower()
        is_temporary = any(word in lowered for word in ("timeout", "connection", "too many requests"))

        super().__init__(
            message,
            context={
                "locale": locale,
                "provider": provider,
                "provider_error": provider_error,
                "is_temporary": is_temporary,
            },
            retry_after=10 if is_temporary else None,
            **kwargs
        )

    def is_retryable(self) -> bool:
        """Provider errors are retryable if they're connection/throttling related."""
        return self.context.get("is_temporary", False)
