"""Locale file storage."""

from .locale_files import LocaleFileStore

__all__ = ["LocaleFileStore"]
