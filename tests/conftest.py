"""
Pytest configuration and fixtures for locale-sync tests.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple

import pytest

from locale_sync.config import Settings
from locale_sync.reconcile import ReconciliationOrchestrator, TranslationBatcher
from locale_sync.storage import LocaleFileStore
from locale_sync.translation import TranslationProvider


class FakeProvider(TranslationProvider):
    """Provider that translates line by line without any network."""

    name = "fake"

    def __init__(
        self,
        glossary: Optional[Dict[str, str]] = None,
        transform: Optional[Callable[[str, str], str]] = None,
    ):
        self.glossary = glossary or {}
        self.transform = transform or (lambda text, target: f"{text} [{target}]")
        self.calls: List[Tuple[str, Optional[str], str]] = []

    async def translate(self, text: str, source_locale: Optional[str], target_locale: str) -> str:
        self.calls.append((text, source_locale, target_locale))
        return "\n".join(
            self.glossary.get(line, self.transform(line, target_locale)) for line in text.split("\n")
        )


class FailingProvider(TranslationProvider):
    """Provider whose every call raises."""

    name = "failing"

    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    async def translate(self, text: str, source_locale: Optional[str], target_locale: str) -> str:
        self.calls += 1
        raise self.error


def write_locale(directory: Path, locale: str, tree: Any) -> Path:
    """Write a locale file, ``tree`` may also be raw text."""
    path = directory / f"{locale}.json"
    if isinstance(tree, str):
        path.write_text(tree, encoding="utf-8")
    else:
        path.write_text(json.dumps(tree, ensure_ascii=False), encoding="utf-8")
    return path


def read_locale(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config() -> Settings:
    """Create test configuration."""
    return Settings(
        _env_file=None,
        deepl_api_key="test-key",
        base_locale="en",
        output_dir_name="translates",
        report_filename="translation_log.md",
    )


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def store(temp_dir: Path) -> LocaleFileStore:
    return LocaleFileStore(temp_dir)


@pytest.fixture
def orchestrator(store: LocaleFileStore, fake_provider: FakeProvider) -> ReconciliationOrchestrator:
    return ReconciliationOrchestrator(store, TranslationBatcher(fake_provider))


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    """Factory for fake providers with a custom glossary or transform."""
    return FakeProvider


@pytest.fixture
def failing_provider() -> Callable[[Exception], FailingProvider]:
    return FailingProvider


@pytest.fixture
def locale_writer(temp_dir: Path) -> Callable[[str, Any], Path]:
    """Write locale files into the temporary directory."""
    return lambda locale, tree: write_locale(temp_dir, locale, tree)


@pytest.fixture
def locale_reader() -> Callable[[Path], Dict[str, Any]]:
    return read_locale
