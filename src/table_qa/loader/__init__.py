"""
CSV table loading.

Components:
- TableLoader: Parses delimited text into a Table
- exceptions: Input data shape errors (ParseError, MalformedRowError, ...)
"""

from table_qa.loader.csv_loader import TableLoader
from table_qa.loader.exceptions import (
    EmptyTableError,
    MalformedRowError,
    ParseError,
    TableLoadError,
    TableSourceError,
)

__all__ = [
    "TableLoader",
    "TableLoadError",
    "TableSourceError",
    "EmptyTableError",
    "ParseError",
    "MalformedRowError",
]
