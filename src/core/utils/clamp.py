"""Helpers keeping report fields within the transport's strict size limits.

Long field values are split on line boundaries instead of being truncated, and
fenced code blocks are re-fenced so every chunk renders on its own.
"""

from __future__ import annotations

from typing import Final

from src.contracts.reports import Report

FENCE: Final[str] = "```"
MAX_FIELD_SIZE: Final[int] = 1024
MAX_FIELDS: Final[int] = 25
MAX_REPORT_CHARS: Final[int] = 6000
CONTINUED_NAME: Final[str] = "..."


def code_block(text: str) -> str:
    """Wrap text in a fenced code block."""
    return f"{FENCE}\n{text}\n{FENCE}"


def split_field_value(value: str, limit: int = MAX_FIELD_SIZE) -> list[str]:
    """Split a field value into chunks below ``limit`` characters.

    Splits happen on line boundaries. When the whole value is a fenced code
    block each chunk gets its own opening/closing fence.
    """
    if not value:
        return []
    if len(value) <= limit:
        return [value]

    fenced = value.startswith(FENCE) and value.endswith(FENCE)
    # leave room for the fences added back to each chunk
    budget = limit - 2 * (len(FENCE) + 1) if fenced else limit

    chunks: list[str] = []
    current = ""
    for line in _split_long_lines(value.split("\n"), budget - 1):
        candidate = line if not current else f"{current}\n{line}"
        if current and len(candidate) >= budget:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)

    if fenced:
        # a lone fence line would render as an empty code block
        chunks = [_restore_fences(chunk) for chunk in chunks if chunk != FENCE]
    return chunks


def _split_long_lines(lines: list[str], width: int) -> list[str]:
    """Cut lines longer than ``width`` into consecutive pieces."""
    pieces: list[str] = []
    for line in lines:
        if len(line) <= width:
            pieces.append(line)
            continue
        pieces.extend(line[i : i + width] for i in range(0, len(line), width))
    return pieces


def _restore_fences(chunk: str) -> str:
    if not chunk.startswith(FENCE):
        chunk = f"{FENCE}\n{chunk}"
    if not chunk.endswith(FENCE) or chunk == FENCE:
        chunk = f"{chunk}\n{FENCE}"
    return chunk


def add_fields(report: Report, name: str, value: str) -> Report:
    """Add a possibly long value as one or more fields.

    The first chunk keeps ``name``; following chunks are named ``...``.
    Empty values add nothing.
    """
    for i, chunk in enumerate(split_field_value(value)):
        report.add_field(name if i == 0 else CONTINUED_NAME, chunk)
    return report


def fits(report: Report, name: str, value: str) -> bool:
    """Whether a field can be added without exceeding the report limits."""
    return (
        len(report.fields) < MAX_FIELDS
        and report.total_chars + len(name) + len(value) <= MAX_REPORT_CHARS
    )
