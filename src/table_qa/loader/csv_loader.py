"""
CSV to Table conversion.

Parses header-plus-rows delimited text into a column-oriented Table:
- Leading whitespace in fields is dropped
- Blank lines are skipped
- Quoting is parsed strictly (malformed quotes raise ParseError)
- Rows with a different field count than the header raise MalformedRowError
"""

import csv
import io
from pathlib import Path

import structlog

from table_qa.loader.exceptions import (
    EmptyTableError,
    MalformedRowError,
    ParseError,
    TableLoadError,
    TableSourceError,
)
from table_qa.models.table import Table
from table_qa.monitoring.metrics import table_load_failures_total, table_rows_loaded


logger = structlog.get_logger(__name__)


class TableLoader:
    """
    Stateless CSV parser producing a fresh Table per call.

    The loader holds only its dialect options, so one instance can be
    shared across concurrent requests.
    """

    def __init__(self, delimiter: str = ","):
        """
        Args:
            delimiter: Single-character field separator
        """
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        self.delimiter = delimiter

    def load(self, text: str) -> Table:
        """
        Parse CSV text into a Table.

        Args:
            text: Header row followed by one or more data rows

        Returns:
            Table with one column per header field, in header order

        Raises:
            EmptyTableError: No header row or no data rows
            ParseError: Malformed quoting, or duplicate/empty header names
            MalformedRowError: A data row's field count differs from the header
        """
        try:
            table = self._parse(text)
        except TableLoadError as e:
            table_load_failures_total.labels(error_type=type(e).__name__).inc()
            logger.warning(
                "Table load failed",
                error_type=type(e).__name__,
                details=e.details,
            )
            raise

        table_rows_loaded.observe(table.row_count)
        logger.debug(
            "Table loaded",
            columns=len(table),
            rows=table.row_count,
        )
        return table

    def load_file(self, path: str | Path) -> Table:
        """
        Read a CSV file fresh from disk and parse it.

        Raises:
            TableSourceError: File missing, unreadable or not UTF-8
            (plus everything load() raises)
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            table_load_failures_total.labels(error_type=TableSourceError.__name__).inc()
            logger.error("Table source unreadable", path=str(path), error=str(e))
            raise TableSourceError(f"Cannot read table source: {e}", path=str(path)) from e

        return self.load(text)

    def _parse(self, text: str) -> Table:
        # Physical lines kept so a parsed record can be checked against its raw text
        lines = io.StringIO(text, newline="").readlines()
        reader = csv.reader(
            lines,
            delimiter=self.delimiter,
            skipinitialspace=True,
            strict=True,
        )

        headers: list[str] | None = None
        header_line = 0
        columns: list[list[str]] = []
        consumed = 0

        try:
            for row in reader:
                start, consumed = consumed + 1, reader.line_num
                raw = "".join(lines[start - 1:consumed])

                if not row or not raw.strip():
                    continue

                if _has_bare_quote(raw, self.delimiter):
                    raise ParseError(
                        f"Malformed CSV on line {start}: bare quote in unquoted field",
                        line_number=start,
                        parse_error="bare \" in non-quoted field",
                    )

                if headers is None:
                    header_line = start
                    headers = self._check_headers(row, header_line)
                    columns = [[] for _ in headers]
                    continue

                if len(row) != len(headers):
                    raise MalformedRowError(
                        f"Row on line {start} has {len(row)} fields, "
                        f"expected {len(headers)}",
                        line_number=start,
                        expected=len(headers),
                        actual=len(row),
                    )

                for cells, value in zip(columns, row):
                    cells.append(value)

        except csv.Error as e:
            # Reported at the start of the record that failed, not where reading stopped
            raise ParseError(
                f"Malformed CSV on line {consumed + 1}: {e}",
                line_number=consumed + 1,
                parse_error=str(e),
            ) from e

        if headers is None:
            raise EmptyTableError("CSV input has no header row")
        if not columns[0]:
            raise EmptyTableError(
                "CSV input must contain at least one row of data",
                {"line_number": header_line},
            )

        return Table(
            column_names=tuple(headers),
            column_values=tuple(tuple(cells) for cells in columns),
        )

    @staticmethod
    def _check_headers(row: list[str], line_number: int) -> list[str]:
        seen: set[str] = set()
        for name in row:
            if not name:
                raise ParseError(
                    f"Empty column name in header on line {line_number}",
                    line_number=line_number,
                )
            if name in seen:
                raise ParseError(
                    f"Duplicate column name {name!r} in header on line {line_number}",
                    line_number=line_number,
                )
            seen.add(name)
        return row


def _has_bare_quote(raw: str, delimiter: str) -> bool:
    """True if a quote appears inside a field that did not open with one.

    csv.reader keeps such quotes as literal text even in strict mode.
    Leading spaces are skipped before deciding whether a field is quoted,
    matching skipinitialspace.
    """
    state = "start"
    for ch in raw:
        if state == "start":
            if ch == " " or ch == delimiter or ch in "\r\n":
                continue
            state = "quoted" if ch == '"' else "unquoted"
        elif state == "unquoted":
            if ch == '"':
                return True
            if ch == delimiter or ch in "\r\n":
                state = "start"
        elif state == "quoted":
            if ch == '"':
                state = "closing"
        else:
            # after a quote inside a quoted field: "" is an escaped quote
            if ch == '"':
                state = "quoted"
            elif ch == delimiter or ch in "\r\n":
                state = "start"
            else:
                state = "unquoted"
    return False
