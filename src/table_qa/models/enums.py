"""
Enumerations for Table QA data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class Aggregator(str, Enum):
    """
    Aggregation operator chosen by the table-QA model.

    NONE means the answer is read directly from the selected cells.
    The other labels mean the answer was computed over them.
    """

    NONE = "NONE"
    COUNT = "COUNT"
    SUM = "SUM"
    AVERAGE = "AVERAGE"
