"""
Reconciliation of every selected locale against the base locale.

Each locale runs as its own task. A task never raises: whatever goes wrong is
turned into a failed result, so one broken locale cannot stop the others or
the report.
"""

import asyncio
from typing import List, Optional, Sequence

import structlog

from locale_sync.errors import LocaleFileError, LocaleSyncError
from locale_sync.report import render_markdown
from locale_sync.storage import LocaleFileStore

from .batcher import TranslationBatcher
from .differ import missing_keys
from .flattener import FlatKeyMap, flatten
from .models import ReconciliationReport, ReconciliationResult
from .rehydrator import rehydrate

logger = structlog.get_logger(__name__)


class ReconciliationOrchestrator:
    """Drives flatten, diff, translate, rehydrate and write for each locale."""

    def __init__(self, store: LocaleFileStore, batcher: TranslationBatcher):
        self.store = store
        self.batcher = batcher

    async def run(
        self, locales: Optional[Sequence[str]] = None, replace_original: bool = False
    ) -> ReconciliationReport:
        """Reconcile ``locales`` (all discovered ones when None) and write the report.

        Raises:
            BaseLocaleError: If the base locale cannot be loaded; nothing is
                processed in that case
            OutputWriteError: If the copy directory or the report cannot be
                written
        """
        base_flat = flatten(await self.store.read_base())
        logger.info("Base locale loaded", locale=self.store.base_locale, keys=len(base_flat))

        if locales is None:
            locales = self.store.discover_locales()
        locales = list(dict.fromkeys(locales))

        if not replace_original:
            self.store.ensure_output_dir()

        results: List[ReconciliationResult] = await asyncio.gather(
            *(self.reconcile_locale(locale, base_flat, replace_original) for locale in locales)
        )

        report = ReconciliationReport(
            base_locale=self.store.base_locale,
            replace_original=replace_original,
            results=list(results),
        )
        await self.store.write_report(render_markdown(report))

        logger.info(
            "Reconciliation finished",
            locales=len(report.results),
            failed=len(report.failures),
            keys_filled=report.keys_filled,
        )
        return report

    async def reconcile_locale(
        self, locale: str, base_flat: FlatKeyMap, replace_original: bool
    ) -> ReconciliationResult:
        """Run the whole pipeline for one locale, never raising."""
        log = logger.bind(locale=locale)
        try:
            if locale == self.store.base_locale:
                raise LocaleFileError(
                    f"'{locale}' is the base locale and cannot be a target", locale=locale
                )
            tree = await self.store.read_tree(locale)
            missing = missing_keys(base_flat, flatten(tree))

            if not missing:
                log.info("All keys are present")
                return ReconciliationResult.complete(locale)

            log.info("Missing keys found", count=len(missing))
            translated = await self.batcher.translate_missing(missing, base_flat, locale)
            rehydrate(tree, translated)
            output_path = await self.store.write_tree(locale, tree, replace_original)
            return ReconciliationResult.filled(locale, translated, output_path)

        except LocaleSyncError as e:
            log.error("Locale failed", error=e.message, error_code=e.error_code, context=e.context)
            return ReconciliationResult.failed(locale, e)
        except Exception as e:
            log.exception("Unexpected error while reconciling locale", error=str(e))
            return ReconciliationResult.failed(
                locale, LocaleSyncError(f"Unexpected error: {e}", previous_error=e)
            )

