"""Row sources — in-memory providers of raw directory rows."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Protocol

from dirlist.model.models import ALL_COLUMNS, COLUMN_AUTHORITY, Row


class RowSource(Protocol):
    """Anything that can produce the rows of one directory listing."""

    def query(self) -> Iterable[Row]: ...


class MatrixRowSource:
    """A fixed table of rows with a declared set of columns.

    Columns left out of a row read as None. When ``authority`` is given, rows
    that do not set the authority column are tagged with it.
    """

    def __init__(self, columns: Sequence[str] = ALL_COLUMNS, authority: str | None = None) -> None:
        """Initialise an empty table.

        Args:
            columns: Column names rows may set.
            authority: Authority to apply to rows that carry none.
        """
        self._columns = tuple(columns)
        self._authority = authority
        self._rows: list[dict[str, Any]] = []

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    def new_row(self, **values: Any) -> dict[str, Any]:
        """Append a row built from keyword arguments and return it."""
        return self.add_row(values)

    def add_row(self, values: Row) -> dict[str, Any]:
        """Append a row and return the stored copy.

        Raises:
            ValueError: If ``values`` names a column the table does not declare.
        """
        unknown = [name for name in values if name not in self._columns]
        if unknown:
            raise ValueError(f"Unknown columns: {', '.join(sorted(unknown))}")

        row: dict[str, Any] = dict.fromkeys(self._columns)
        row.update(values)
        if self._authority is not None and row.get(COLUMN_AUTHORITY) is None:
            row[COLUMN_AUTHORITY] = self._authority
        self._rows.append(row)
        return row

    def query(self) -> list[Row]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)


def merge_rows(*sources: RowSource) -> Iterator[Row]:
    """Yield every row of every source, source by source, in order."""
    for source in sources:
        yield from source.query()
