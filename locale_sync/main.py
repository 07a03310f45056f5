"""Command line entry point for locale-sync."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from locale_sync import __version__
from locale_sync.config import Settings, load_config
from locale_sync.errors import LocaleSyncError
from locale_sync.reconcile import ReconciliationOrchestrator, ReconciliationReport, TranslationBatcher
from locale_sync.storage import LocaleFileStore
from locale_sync.translation import DeepLProvider, TranslationProvider


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging."""
    level = logging.DEBUG if debug else logging.INFO

    # Clear any existing handlers to prevent duplication
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.dev.ConsoleRenderer(colors=True)
                if debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="locale-sync",
        description="Translate keys missing from locale files using the base locale",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"locale-sync {__version__}")

    parser.add_argument(
        "directory", nargs="?", type=Path, help="Directory containing <locale>.json files"
    )
    parser.add_argument(
        "--locales", nargs="+", metavar="LOCALE", help="Locales to process (default: all)"
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--replace", dest="replace_original", action="store_true", help="Overwrite the original files"
    )
    mode.add_argument(
        "--copy",
        dest="replace_original",
        action="store_false",
        help="Write updated files into the output directory (default)",
    )
    parser.set_defaults(replace_original=None)

    parser.add_argument("--base-locale", help="Reference locale (default: en)")
    parser.add_argument(
        "--max-concurrency", type=int, help="Maximum number of simultaneous provider calls"
    )
    parser.add_argument("--config-file", type=Path, help="Path to a .env style configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def resolve_directory(directory: Optional[Path]) -> Path:
    """Return the translations directory, asking for it when not given."""
    if directory is None:
        directory = Path(input("Please enter a path: ").strip())
    return directory.expanduser().resolve()


def is_interactive() -> bool:
    return sys.stdin.isatty()


def prompt_locales(available: List[str]) -> Optional[List[str]]:
    """Ask which of the discovered locales to process, None meaning all."""
    print(f"Locales found: {', '.join(available) or '(none)'}")
    answer = input("Locales to process (blank for all): ").strip()
    if not answer:
        return None
    return answer.replace(",", " ").split()


def prompt_replace() -> bool:
    answer = input("Replace the original files? [y/N]: ").strip().lower()
    return answer in ("y", "yes")


def build_orchestrator(
    config: Settings, directory: Path, provider: Optional[TranslationProvider] = None
) -> ReconciliationOrchestrator:
    """Wire store, provider and batcher from settings."""
    store = LocaleFileStore(
        directory,
        base_locale=config.base_locale,
        output_dir_name=config.output_dir_name,
        report_filename=config.report_filename,
    )
    if provider is None:
        provider = DeepLProvider(config.deepl_api_key, retry_attempts=config.provider_retry_attempts)
    batcher = TranslationBatcher(
        provider,
        source_locale=config.source_locale,
        max_concurrency=config.max_concurrency,
        locale_mapper=config.provider_locale,
    )
    return ReconciliationOrchestrator(store, batcher)


def print_summary(report: ReconciliationReport, report_path: Path) -> None:
    for result in report.results:
        marker = "✅" if result.succeeded else "❌"
        print(f"{marker} {result.locale}: {result.describe()}")
    print(f"Report written to {report_path}")


async def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point, returns the exit status."""
    args = parse_args(argv)

    try:
        config = load_config(
            config_file=args.config_file,
            base_locale=args.base_locale,
            max_concurrency=args.max_concurrency,
            debug=args.debug or None,
        )
    except LocaleSyncError as e:
        setup_logging(debug=args.debug)
        structlog.get_logger().error("Configuration error", error=str(e))
        return 1

    setup_logging(debug=config.debug)
    logger = structlog.get_logger()
    logger.info("Starting locale-sync", version=__version__)

    try:
        directory = resolve_directory(args.directory)
    except EOFError:
        logger.error("No directory given and no input available")
        return 1
    if not directory.is_dir():
        logger.error("Directory does not exist", path=str(directory))
        return 1

    try:
        orchestrator = build_orchestrator(config, directory)
        locales, replace_original = args.locales, args.replace_original
        if locales is None and replace_original is None and is_interactive():
            locales = prompt_locales(orchestrator.store.discover_locales())
            replace_original = prompt_replace()
        report = await orchestrator.run(locales, replace_original=bool(replace_original))
    except EOFError:
        logger.error("Input ended before all answers were given")
        return 1
    except LocaleSyncError as e:
        logger.error("Run aborted", error=e.message, error_code=e.error_code, context=e.context)
        return 1
    except Exception as e:
        logger.exception("Unexpected error", error=str(e))
        return 1

    print_summary(report, orchestrator.store.report_path)
    return 1 if report.has_failures else 0


def run() -> None:
    """Synchronous entry point for setuptools."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        sys.exit(130)


if __name__ == "__main__":
    run()
