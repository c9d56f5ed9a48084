"""
Data models for the Table QA Service.

Includes:
- Table (frozen column-oriented table)
- TableQuestion (request payload) and Answer (decoded response)
- Aggregator enum
"""

from table_qa.models.enums import Aggregator
from table_qa.models.table import Table
from table_qa.models.answer import Answer, TableQuestion

__all__ = [
    "Aggregator",
    "Table",
    "TableQuestion",
    "Answer",
]
