"""Runtime settings for locale-sync."""

from typing import Dict, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# DeepL only accepts regional variants for these target languages
DEFAULT_LOCALE_ALIASES = {"en": "EN-US", "pt": "PT-PT"}


class Settings(BaseSettings):
    """Settings loaded from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="LOCALE_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Provider
    deepl_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DEEPL_API_KEY", "LOCALE_SYNC_DEEPL_API_KEY"),
        description="DeepL authentication key",
    )
    source_locale: Optional[str] = Field(
        default=None, description="Source language code, None lets the provider detect it"
    )
    locale_aliases: Dict[str, str] = Field(
        default_factory=dict, description="File locale code -> provider language code"
    )
    provider_retry_attempts: int = Field(default=3, ge=1)
    max_concurrency: Optional[int] = Field(
        default=None, ge=1, description="Upper bound on simultaneous provider calls"
    )

    # Files
    base_locale: str = Field(default="en", description="Reference locale")
    output_dir_name: str = Field(default="translates")
    report_filename: str = Field(default="translation_log.md")

    debug: bool = False

    @field_validator("base_locale", "output_dir_name", "report_filename")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("locale_aliases")
    @classmethod
    def _normalize_aliases(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {locale.strip(): code.strip() for locale, code in value.items()}

    def provider_locale(self, locale: str) -> str:
        """Language code to send to the provider for a file locale.

        ``locale_aliases`` wins over ``DEFAULT_LOCALE_ALIASES``; anything else
        is passed through unchanged.
        """
        if locale in self.locale_aliases:
            return self.locale_aliases[locale]
        return DEFAULT_LOCALE_ALIASES.get(locale.lower(), locale)
