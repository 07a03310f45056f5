"""Batched translation of missing keys."""

import asyncio
from contextlib import nullcontext
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import structlog

from locale_sync.errors import (
    BatchAlignmentError,
    LocaleSyncError,
    TranslationProviderError,
)
from locale_sync.translation import TranslationProvider

from .flattener import FlatKeyMap

logger = structlog.get_logger(__name__)

BATCH_DELIMITER = "\n"


class TranslationBatcher:
    """Sends all missing values of one locale to the provider in a single call.

    The batch travels as delimiter-joined text, so position is the only link
    between a key and its translation. Both sides of the call are checked to
    keep that link intact.
    """

    def __init__(
        self,
        provider: TranslationProvider,
        source_locale: Optional[str] = None,
        max_concurrency: Optional[int] = None,
        locale_mapper: Optional[Callable[[str], str]] = None,
    ):
        self.provider = provider
        self.source_locale = source_locale
        self.locale_mapper = locale_mapper or (lambda locale: locale)
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    def build_batch(self, keys: Sequence[str], base: Mapping[str, Any], locale: str) -> List[str]:
        """Source strings for ``keys`` in order, rejecting embedded delimiters."""
        batch = []
        for key in keys:
            value = base[key]
            if BATCH_DELIMITER in value:
                raise BatchAlignmentError(
                    f"Value of '{key}' contains the batch delimiter",
                    locale=locale,
                    expected=len(keys),
                    key=key,
                )
            batch.append(value)
        return batch

    async def translate_missing(
        self, missing: Sequence[str], base: Mapping[str, Any], target_locale: str
    ) -> FlatKeyMap:
        """Translate the base values of ``missing`` into ``target_locale``.

        Non-string leaves and empty strings are copied as they are. The returned
        map follows the order of ``missing``.

        Raises:
            BatchAlignmentError: If positions cannot be trusted
            TranslationProviderError: If the provider call fails
        """
        # Empty strings stay out of the batch: a blank line may not survive the provider
        text_keys = [key for key in missing if isinstance(base[key], str) and base[key]]
        batch = self.build_batch(text_keys, base, target_locale)

        translations: Dict[str, Any] = {}
        if batch:
            received = await self._call_provider(BATCH_DELIMITER.join(batch), target_locale)
            parts = received.split(BATCH_DELIMITER)
            if len(parts) != len(batch):
                raise BatchAlignmentError(
                    f"Expected {len(batch)} translations for '{target_locale}', got {len(parts)}",
                    locale=target_locale,
                    expected=len(batch),
                    received=len(parts),
                )
            translations = dict(zip(text_keys, parts))

        result: FlatKeyMap = {
            key: translations[key] if key in translations else base[key] for key in missing
        }

        logger.info(
            "Missing keys translated",
            locale=target_locale,
            translated=len(batch),
            copied=len(result) - len(batch),
            pairs=result,
        )
        return result

    async def _call_provider(self, text: str, target_locale: str) -> str:
        provider_locale = self.locale_mapper(target_locale)
        guard = self._semaphore if self._semaphore is not None else nullcontext()
        async with guard:
            try:
                return await self.provider.translate(text, self.source_locale, provider_locale)
            except LocaleSyncError:
                raise
            except Exception as e:
                raise TranslationProviderError(
                    f"Translation into '{target_locale}' failed: {e}",
                    locale=target_locale,
                    provider=self.provider.name,
                    provider_error=type(e).__name__,
                    previous_error=e,
                ) from e
