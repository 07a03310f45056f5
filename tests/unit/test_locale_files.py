"""
Unit tests for the locale file store.
"""

import json
from unittest.mock import AsyncMock, patch

import aiofiles.os
import pytest

from locale_sync.errors import BaseLocaleError, LocaleFileError, OutputWriteError
from locale_sync.storage import LocaleFileStore


class TestLocaleFileStore:
    """Test reading, writing and discovery of locale files."""

    def test_discover_locales_excludes_base(self, store, locale_writer, temp_dir):
        locale_writer("en", {})
        locale_writer("fr", {})
        locale_writer("es", {})
        (temp_dir / "notes.txt").write_text("ignored")

        assert store.discover_locales() == ["es", "fr"]

    @pytest.mark.asyncio
    async def test_read_base(self, store, locale_writer):
        locale_writer("en", {"a": {"b": "Hello"}})

        assert await store.read_base() == {"a": {"b": "Hello"}}

    @pytest.mark.asyncio
    async def test_read_base_missing(self, store):
        with pytest.raises(BaseLocaleError) as exc_info:
            await store.read_base()

        assert exc_info.value.context["locale"] == "en"
        assert exc_info.value.context["path"].endswith("en.json")

    @pytest.mark.asyncio
    async def test_read_base_invalid_json(self, store, locale_writer):
        locale_writer("en", "{not json")

        with pytest.raises(BaseLocaleError):
            await store.read_base()

    @pytest.mark.asyncio
    async def test_read_tree_keeps_key_order(self, store, locale_writer):
        locale_writer("es", '{"z": "1", "a": {"y": "2", "b": "3"}}')

        tree = await store.read_tree("es")

        assert list(tree) == ["z", "a"]
        assert list(tree["a"]) == ["y", "b"]

    @pytest.mark.asyncio
    async def test_read_tree_missing(self, store):
        with pytest.raises(LocaleFileError) as exc_info:
            await store.read_tree("xx")

        assert exc_info.value.context["locale"] == "xx"

    @pytest.mark.asyncio
    async def test_read_tree_not_an_object(self, store, locale_writer):
        locale_writer("es", '["a", "b"]')

        with pytest.raises(LocaleFileError):
            await store.read_tree("es")

    def test_output_path(self, store, temp_dir):
        assert store.output_path("es", replace_original=True) == temp_dir / "es.json"
        assert store.output_path("es", replace_original=False) == temp_dir / "translates" / "es.json"

    def test_ensure_output_dir_is_idempotent(self, store, temp_dir):
        store.ensure_output_dir()
        store.ensure_output_dir()

        assert (temp_dir / "translates").is_dir()

    @pytest.mark.asyncio
    async def test_write_tree_replace(self, store, temp_dir):
        path = await store.write_tree("es", {"saludo": "¡Hola!"}, replace_original=True)

        assert path == temp_dir / "es.json"
        content = path.read_text(encoding="utf-8")
        assert content == '{\n  "saludo": "¡Hola!"\n}\n'

    @pytest.mark.asyncio
    async def test_write_tree_copy(self, store, temp_dir):
        store.ensure_output_dir()

        path = await store.write_tree("es", {"a": "b"}, replace_original=False)

        assert path == temp_dir / "translates" / "es.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "b"}

    @pytest.mark.asyncio
    async def test_write_report(self, temp_dir):
        store = LocaleFileStore(temp_dir, report_filename="log.md")

        path = await store.write_report("# Report\n")

        assert path == temp_dir / "log.md"
        assert path.read_text(encoding="utf-8") == "# Report\n"

    def test_custom_base_locale(self, temp_dir, locale_writer):
        locale_writer("de", {})
        locale_writer("en", {})
        store = LocaleFileStore(temp_dir, base_locale="de")

        assert store.discover_locales() == ["en"]

    @pytest.mark.parametrize("locale", ["", ".", "..", "../es", "sub/es", "sub\\es"])
    def test_locale_name_with_path_rejected(self, store, locale):
        with pytest.raises(LocaleFileError):
            store.check_locale_name(locale)

    @pytest.mark.asyncio
    async def test_read_tree_outside_directory_rejected(self, store):
        with pytest.raises(LocaleFileError) as exc_info:
            await store.read_tree("../es")

        assert exc_info.value.context["locale"] == "../es"

    @pytest.mark.asyncio
    async def test_failed_replace_keeps_original(self, store, locale_writer, locale_reader, temp_dir):
        es_path = locale_writer("es", {"a": "Hola"})

        with patch.object(aiofiles.os, "replace", new=AsyncMock(side_effect=OSError("disk full"))):
            with pytest.raises(LocaleFileError):
                await store.write_tree("es", {"a": "Hola", "b": "Mundo"}, replace_original=True)

        assert locale_reader(es_path) == {"a": "Hola"}
        assert [path.name for path in temp_dir.iterdir()] == ["es.json"]

    @pytest.mark.asyncio
    async def test_write_report_failure(self, store, temp_dir):
        (temp_dir / "translation_log.md").mkdir()

        with pytest.raises(OutputWriteError) as exc_info:
            await store.write_report("# Report\n")

        assert exc_info.value.context["path"].endswith("translation_log.md")

    def test_output_dir_blocked_by_file(self, store, temp_dir):
        (temp_dir / "translates").write_text("not a directory")

        with pytest.raises(OutputWriteError):
            store.ensure_output_dir()
