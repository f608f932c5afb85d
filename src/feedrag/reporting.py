"""Reporting helpers: CSV export and plain-text tables."""
from __future__ import annotations

import csv
import numbers
from typing import Iterable, List, Sequence


def _format_cell(value: object) -> str:
    """Format cells to avoid decimal places in numeric output."""

    if isinstance(value, numbers.Real):
        return format(value, ".0f")
    return str(value)


def export_csv(path: str, header: Sequence[str], rows: Iterable[Sequence]):
    """Write header/row data to a CSV file."""

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([_format_cell(h) for h in header])
        for row in rows:
            writer.writerow([_format_cell(cell) for cell in row])


def render_table(header: Sequence[str], rows: Iterable[Sequence], currency: str = "$") -> List[str]:
    """Return aligned text lines; the first column is left as-is, the rest as money."""

    def fmt(idx, value):
        if idx == 0:
            return f"{value}"
        if isinstance(value, numbers.Real):
            return f"{currency}{value:,.0f}"
        return str(value)

    formatted_rows = []
    widths = [len(str(col)) for col in header]
    for row in rows:
        formatted_row = []
        for idx, value in enumerate(row):
            text = fmt(idx, value)
            formatted_row.append(text)
            widths[idx] = max(widths[idx], len(text))
        formatted_rows.append(formatted_row)

    lines = [
        " | ".join(str(col).ljust(widths[idx]) for idx, col in enumerate(header)),
        "-+-".join("-" * w for w in widths),
    ]
    for row in formatted_rows:
        lines.append(
            " | ".join(
                cell.ljust(widths[idx]) if idx == 0 else cell.rjust(widths[idx])
                for idx, cell in enumerate(row)
            )
        )
    return lines


__all__ = ["export_csv", "render_table"]
