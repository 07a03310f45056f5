"""
Translation provider clients.

The reconciler talks to providers through ``TranslationProvider``: one block of
text in, one block of translated text out. ``DeepLProvider`` is the default
implementation.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import deepl
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from locale_sync.errors import ConfigurationError

logger = structlog.get_logger(__name__)

# Errors that go away on their own
TRANSIENT_ERRORS = (deepl.ConnectionException, deepl.TooManyRequestsException)


class TranslationProvider(ABC):
    """Opaque text translation service."""

    name = "provider"

    @abstractmethod
    async def translate(
        self, text: str, source_locale: Optional[str], target_locale: str
    ) -> str:
        """Translate ``text`` into ``target_locale``.

        Args:
            text: Text to translate, may span several lines
            source_locale: Source language code, None for auto-detection
            target_locale: Target language code

        Returns:
            Translated text
        """


class DeepLProvider(TranslationProvider):
    """Translation through the DeepL API."""

    name = "deepl"

    def __init__(
        self,
        api_key: Optional[str],
        retry_attempts: int = 3,
        translator: Optional[deepl.Translator] = None,
        retry_wait: Optional[wait_base] = None,
    ):
        if translator is None:
            if not api_key:
                raise ConfigurationError(
                    "DeepL API key is not set (DEEPL_API_KEY)", config_key="deepl_api_key"
                )
            translator = deepl.Translator(api_key)
        self.translator = translator
        self.retry_attempts = retry_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=30)

    async def translate(
        self, text: str, source_locale: Optional[str], target_locale: str
    ) -> str:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        "Retrying DeepL request",
                        target_locale=target_locale,
                        attempt=attempt.retry_state.attempt_number,
                    )
                result = await asyncio.to_thread(
                    self.translator.translate_text,
                    text,
                    source_lang=source_locale,
                    target_lang=target_locale,
                )
        return result.text
