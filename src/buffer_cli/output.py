"""Render API payloads as JSON, a text table or CSV.

Table and CSV modes work on the top-level keys only; the keys of the first
record define the columns.
"""

from __future__ import annotations

import csv
import io
import json
import sys
from enum import Enum
from typing import Any, Mapping, Sequence

from rich import box
from rich.cells import cell_len
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .api.errors import BufferAPIError

NO_DATA = "No data"


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    TABLE = "table"
    CSV = "csv"


class OutputFormatError(ValueError):
    """Raised when a value cannot be rendered in the requested format."""


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def _to_records(value: Any, fmt: OutputFormat) -> list[Mapping[str, Any]]:
    """Normalize a record or a sequence of records into a list."""
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        records = list(value)
        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise OutputFormatError(
                    f"Cannot render {fmt.value}: item {index} is "
                    f"{type(record).__name__}, expected a record"
                )
        return records
    raise OutputFormatError(
        f"Cannot render {fmt.value}: expected a record or a list of records, "
        f"got {type(value).__name__}"
    )


def _single_line(text: str) -> str:
    """Escape line breaks so a cell stays on one table row."""
    return text.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\r")


def _format_table(records: list[Mapping[str, Any]]) -> str:
    if not records:
        return NO_DATA

    columns = [_single_line(str(key)) for key in records[0].keys()]
    rows = [
        [_single_line(_stringify(record.get(key))) for key in records[0].keys()]
        for record in records
    ]

    table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False)
    for column in columns:
        table.add_column(Text(column), no_wrap=True, overflow="ignore")
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))

    # Wide enough that rich never shrinks or truncates a column
    width = 2
    for i, column in enumerate(columns):
        width += max([cell_len(column)] + [cell_len(row[i]) for row in rows]) + 3

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=max(width, 40),
        force_terminal=False,
        no_color=True,
        highlight=False,
        emoji=False,
    )
    console.print(table)
    lines = [line.rstrip() for line in buffer.getvalue().splitlines()]
    return "\n".join(lines).strip("\n")


def _format_csv(records: list[Mapping[str, Any]]) -> str:
    if not records:
        return ""

    keys = list(records[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([str(key) for key in keys])
    for record in records:
        writer.writerow([_stringify(record.get(key)) for key in keys])
    return buffer.getvalue().removesuffix("\n")


def format_output(value: Any, fmt: OutputFormat | str) -> str:
    """Render a record or list of records.

    Args:
        value: A mapping or a sequence of mappings (any JSON value for json)
        fmt: "json", "table" or "csv"

    Returns:
        The rendered text, without a trailing newline

    Raises:
        OutputFormatError: If table/csv is requested for a non-record value
    """
    fmt = OutputFormat(fmt)

    if fmt is OutputFormat.JSON:
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)

    records = _to_records(value, fmt)
    if fmt is OutputFormat.TABLE:
        return _format_table(records)
    return _format_csv(records)


def format_error(error: BufferAPIError | Mapping[str, Any], fmt: OutputFormat | str) -> str:
    """Render a structured error in the same formats as regular output."""
    fmt = OutputFormat(fmt)
    record = error.to_dict() if isinstance(error, BufferAPIError) else dict(error)
    if record.get("retry_after") is None:
        record.pop("retry_after", None)

    if fmt is OutputFormat.JSON:
        return format_output({"error": record}, fmt)
    return format_output(record, fmt)


def print_output(value: Any, fmt: OutputFormat | str) -> None:
    """Write rendered output to stdout."""
    sys.stdout.write(format_output(value, fmt) + "\n")


def print_error(error: BufferAPIError | Mapping[str, Any], fmt: OutputFormat | str) -> None:
    """Write a rendered error to stderr."""
    sys.stderr.write(format_error(error, fmt) + "\n")
