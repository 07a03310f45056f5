"""Markdown rendering of reconciliation reports."""

from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from locale_sync.reconcile.models import ReconciliationReport, ReconciliationResult

TITLE = "# Generated Translations"


def _cell(value: Any) -> str:
    """Make a value safe for a single table cell."""
    text = "" if value is None else str(value)
    return text.replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def _summary(report: "ReconciliationReport") -> List[str]:
    mode = "replace original files" if report.replace_original else "copy to output directory"
    lines = [
        f"Base locale: `{report.base_locale}`  ",
        f"Mode: {mode}",
        "",
        "| Locale | Status | Keys filled | Details |",
        "|--------|--------|-------------|---------|",
    ]
    for result in report.results:
        details = result.error["message"] if result.error else ""
        lines.append(
            f"| {_cell(result.locale)} | {result.status.value} | {result.keys_filled} | {_cell(details)} |"
        )
    return lines


def render_section(result: "ReconciliationResult") -> List[str]:
    """Key/translation table of one locale."""
    lines = [
        f"## Translations for locale: `{result.locale}`",
        "",
        "| Key | Translation |",
        "|-----|-------------|",
    ]
    for key, value in result.translations.items():
        lines.append(f"| {_cell(key)} | {_cell(value)} |")
    lines.extend(["", "---"])
    return lines


def render_markdown(report: "ReconciliationReport") -> str:
    """Render the whole report, one section per locale that got keys."""
    lines = [TITLE, ""]
    lines.extend(_summary(report))
    for result in report.results:
        if result.keys_filled:
            lines.append("")
            lines.extend(render_section(result))
    return "\n".join(lines) + "\n"
