"""Translation providers."""

from .provider import DeepLProvider, TranslationProvider

__all__ = ["DeepLProvider", "TranslationProvider"]
