"""Plain-text tables for report fields (reddit-markdown layout).

    Title
|  Name  | (1) |  %  |
|--------|----:|----:|
| Han    | 100 |  20 |

Numbers are right aligned, text left aligned; ``None`` cells render as ``-``.
"""

from __future__ import annotations

import textwrap
from typing import Any

EMPTY_CELL = "-"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _fmt(value: Any) -> str:
    if value is None:
        return EMPTY_CELL
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class MarkdownTable:
    """Minimal table builder with column wrapping and descending sort."""

    def __init__(self, *heading: str, title: str | None = None) -> None:
        self.title = title
        self.heading = list(heading)
        self._rows: list[list[Any]] = []
        self._wrap: dict[int, int] = {}

    @property
    def rows(self) -> list[list[Any]]:
        return [list(r) for r in self._rows]

    def add_row(self, *cells: Any) -> MarkdownTable:
        row = list(cells)
        if len(row) < len(self.heading):
            row.extend([None] * (len(self.heading) - len(row)))
        self._rows.append(row[: len(self.heading)] if self.heading else row)
        return self

    def set_wrapped(self, column: int, width: int) -> MarkdownTable:
        """Wrap text of a 1-based column at ``width`` characters."""
        self._wrap[column - 1] = width
        return self

    def sort_column_desc(self, column: int) -> MarkdownTable:
        """Stable descending sort on a 1-based column (missing values last)."""
        idx = column - 1

        def key(row: list[Any]) -> tuple[int, Any]:
            value = row[idx]
            if value is None:
                return (0, 0)
            if _is_number(value):
                return (2, value)
            return (1, str(value))

        self._rows.sort(key=key, reverse=True)
        return self

    def _cell_lines(self, idx: int, value: Any) -> list[str]:
        text = _fmt(value)
        width = self._wrap.get(idx)
        if width and len(text) > width:
            return textwrap.wrap(text, width) or [""]
        return [text]

    def render(self) -> str:
        columns = len(self.heading)
        body: list[list[list[str]]] = [
            [self._cell_lines(i, cell) for i, cell in enumerate(row)] for row in self._rows
        ]
        numeric = [
            bool(self._rows) and all(_is_number(r[i]) or r[i] is None for r in self._rows)
            for i in range(columns)
        ]

        widths = [len(h) for h in self.heading]
        for row in body:
            for i, lines in enumerate(row):
                widths[i] = max(widths[i], *(len(line) for line in lines))

        def line(cells: list[str]) -> str:
            padded = [
                c.rjust(widths[i]) if numeric[i] else c.ljust(widths[i])
                for i, c in enumerate(cells)
            ]
            return "| " + " | ".join(padded) + " |"

        out: list[str] = []
        table_width = sum(widths) + 3 * columns + 1
        if self.title:
            out.append(self.title.center(table_width).rstrip())
        out.append(line(self.heading))
        out.append(
            "|"
            + "|".join(
                ("-" * (widths[i] + 1) + ":") if numeric[i] else "-" * (widths[i] + 2)
                for i in range(columns)
            )
            + "|"
        )
        for row in body:
            height = max(len(lines) for lines in row)
            for n in range(height):
                out.append(line([lines[n] if n < len(lines) else "" for lines in row]))

        return "\n".join(out)

    def __str__(self) -> str:
        return self.render()
