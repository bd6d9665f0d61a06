"""Builders for standard bot replies."""

from __future__ import annotations

from src.contracts.common import EmbedColor
from src.contracts.reports import Report
from src.core.utils.clamp import CONTINUED_NAME, fits, split_field_value

SOURCE_SWGOH_HELP = "via swgoh.help"


def reply_report(title: str, text: str, footer: str | None = None) -> Report:
    """Standard reply payload (title, description and optional source footer)."""
    return Report(title=title, description=text, footer=footer)


def error_report(text: str) -> Report:
    return Report(title="Error", description=text, color=EmbedColor.ERROR, thumbnail=False)


def mention(user_id: str | int) -> str:
    return f"<@{user_id}>"


def append_paged_field(
    reports: list[Report],
    name: str,
    value: str,
    continuation: Report,
) -> None:
    """Add a long value to the last report, opening continuation reports.

    ``continuation`` is used as a template (deep copied) whenever the current
    report would exceed the field count or total size limits.
    """
    for i, chunk in enumerate(split_field_value(value)):
        field_name = name if i == 0 else CONTINUED_NAME
        if not fits(reports[-1], field_name, chunk):
            reports.append(continuation.model_copy(deep=True))
        reports[-1].add_field(field_name, chunk)
