"""Locale file storage: one ``<locale>.json`` per locale in a directory."""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import aiofiles
import aiofiles.os
import structlog

from locale_sync.errors import BaseLocaleError, LocaleFileError, OutputWriteError

logger = structlog.get_logger(__name__)

LOCALE_SUFFIX = ".json"


class LocaleFileStore:
    """Reads and writes the locale files of one translations directory."""

    def __init__(
        self,
        directory: Union[str, Path],
        base_locale: str = "en",
        output_dir_name: str = "translates",
        report_filename: str = "translation_log.md",
    ):
        """Initialize the store.

        Args:
            directory: Directory containing the locale files
            base_locale: Locale whose file is the reference
            output_dir_name: Subdirectory used when not replacing originals
            report_filename: Name of the report written into ``directory``
        """
        self.directory = Path(directory)
        self.base_locale = base_locale
        self.output_dir = self.directory / output_dir_name
        self.report_path = self.directory / report_filename

    def locale_path(self, locale: str) -> Path:
        return self.directory / f"{locale}{LOCALE_SUFFIX}"

    def check_locale_name(self, locale: str) -> None:
        """Reject locale codes that would point outside the directory.

        Raises:
            LocaleFileError: If ``locale`` is empty or contains a path separator
        """
        if not locale or locale in (".", "..") or any(sep in locale for sep in ("/", "\\")):
            raise LocaleFileError(f"Invalid locale name {locale!r}", locale=locale)

    def discover_locales(self) -> List[str]:
        """Locale codes of all files in the directory except the base."""
        return sorted(
            path.stem
            for path in self.directory.glob(f"*{LOCALE_SUFFIX}")
            if path.is_file() and path.stem != self.base_locale
        )

    async def read_base(self) -> Dict[str, Any]:
        """Load the base locale tree.

        Raises:
            BaseLocaleError: If the file is missing or is not a JSON object
        """
        path = self.locale_path(self.base_locale)
        if not path.is_file():
            raise BaseLocaleError(
                f"{path.name} not found in {self.directory}", path=str(path), locale=self.base_locale
            )
        try:
            return await self._load(path)
        except (OSError, ValueError) as e:
            raise BaseLocaleError(
                f"Cannot read base locale {path.name}: {e}",
                path=str(path),
                locale=self.base_locale,
                previous_error=e,
            ) from e

    async def read_tree(self, locale: str) -> Dict[str, Any]:
        """Load a target locale tree.

        Raises:
            LocaleFileError: If the file is missing or is not a JSON object
        """
        self.check_locale_name(locale)
        path = self.locale_path(locale)
        try:
            return await self._load(path)
        except FileNotFoundError as e:
            raise LocaleFileError(
                f"{path.name} not found in {self.directory}", locale=locale, path=str(path), previous_error=e
            ) from e
        except (OSError, ValueError) as e:
            raise LocaleFileError(
                f"Cannot read {path.name}: {e}", locale=locale, path=str(path), previous_error=e
            ) from e

    def output_path(self, locale: str, replace_original: bool) -> Path:
        if replace_original:
            return self.locale_path(locale)
        return self.output_dir / f"{locale}{LOCALE_SUFFIX}"

    def ensure_output_dir(self) -> Path:
        """Create the copy output directory if it does not exist yet.

        Raises:
            OutputWriteError: If the directory cannot be created
        """
        if not self.output_dir.is_dir():
            try:
                self.output_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputWriteError(
                    f"Cannot create {self.output_dir}: {e}", path=str(self.output_dir), previous_error=e
                ) from e
            logger.info("Created output directory", dir=str(self.output_dir))
        return self.output_dir

    async def write_tree(self, locale: str, tree: Dict[str, Any], replace_original: bool) -> Path:
        """Write ``tree`` for ``locale``, leaving any existing file intact on failure.

        The content goes to a hidden sibling file first and is then moved over
        the destination.

        Raises:
            LocaleFileError: If the file cannot be written
        """
        self.check_locale_name(locale)
        path = self.output_path(locale, replace_original)
        tmp_path = path.with_name(f".{path.name}.tmp")
        content = json.dumps(tree, indent=2, ensure_ascii=False) + "\n"
        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path.exists():
                await aiofiles.os.remove(tmp_path)
            raise LocaleFileError(
                f"Cannot write {path}: {e}", locale=locale, path=str(path), previous_error=e
            ) from e
        logger.info("Locale file written", locale=locale, file=str(path))
        return path

    async def write_report(self, text: str) -> Path:
        """Write the run report.

        Raises:
            OutputWriteError: If the report file cannot be written
        """
        try:
            async with aiofiles.open(self.report_path, "w", encoding="utf-8") as f:
                await f.write(text)
        except OSError as e:
            raise OutputWriteError(
                f"Cannot write report {self.report_path}: {e}", path=str(self.report_path), previous_error=e
            ) from e
        logger.info("Report written", file=str(self.report_path))
        return self.report_path

    async def _load(self, path: Path) -> Dict[str, Any]:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            data = json.loads(await f.read())
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object at top level, got {type(data).__name__}")
        logger.debug("Loaded locale file", file=str(path))
        return data
