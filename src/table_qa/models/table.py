"""
Column-oriented table representation.

Table is a frozen dataclass: once built by the loader it cannot be changed,
so one instance can be handed to the connector without copying.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Table(Mapping[str, tuple[str, ...]]):
    """
    Immutable mapping from column name to the ordered cells of that column.

    Invariants (checked on construction):
    - column names are unique
    - every column has the same number of cells (row_count)
    - column order is the source header order

    Attributes:
        column_names: Header names in source order
        column_values: Cells per column, parallel to column_names
    """

    column_names: tuple[str, ...]
    column_values: tuple[tuple[str, ...], ...]

    def __post_init__(self) -> None:
        if len(self.column_names) != len(self.column_values):
            raise ValueError(
                f"Table has {len(self.column_names)} column names "
                f"but {len(self.column_values)} columns"
            )
        if len(set(self.column_names)) != len(self.column_names):
            raise ValueError(f"Duplicate column names: {list(self.column_names)}")

        lengths = {len(values) for values in self.column_values}
        if len(lengths) > 1:
            raise ValueError(
                f"Columns have unequal lengths: "
                f"{dict(zip(self.column_names, map(len, self.column_values)))}"
            )

    @classmethod
    def from_columns(cls, columns: Mapping[str, list[str] | tuple[str, ...]]) -> "Table":
        """Build from a {column: cells} mapping, keeping its key order."""
        return cls(
            column_names=tuple(columns),
            column_values=tuple(tuple(cells) for cells in columns.values()),
        )

    @property
    def columns(self) -> tuple[str, ...]:
        return self.column_names

    @property
    def row_count(self) -> int:
        """Number of data rows (0 for a table without columns)."""
        return len(self.column_values[0]) if self.column_values else 0

    def column(self, name: str) -> tuple[str, ...]:
        return self[name]

    def rows(self) -> Iterator[tuple[str, ...]]:
        """Iterate row tuples in source order."""
        return zip(*self.column_values)

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to the {column: [cells]} JSON form."""
        return {
            name: list(values)
            for name, values in zip(self.column_names, self.column_values)
        }

    def __getitem__(self, name: str) -> tuple[str, ...]:
        try:
            index = self.column_names.index(name)
        except ValueError:
            raise KeyError(name) from None
        return self.column_values[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.column_names)

    def __len__(self) -> int:
        return len(self.column_names)

    def __str__(self) -> str:
        return f"Table(columns={len(self.column_names)}, rows={self.row_count})"
