"""
Request and response models for the table-QA inference exchange.

TableQuestion is what goes over the wire; Answer is what comes back.
Answer is strictly typed: a body that does not fit it is a decode failure,
never a partially filled result.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

from table_qa.models.enums import Aggregator
from table_qa.models.table import Table


@dataclass(frozen=True)
class TableQuestion:
    """
    A table paired with the natural-language query asked about it.

    Built immediately before dispatch and owned by the call that builds it.
    """

    table: Table
    query: str

    def to_wire(self) -> dict[str, Any]:
        """JSON body expected by the table-question-answering endpoint."""
        return {"table": self.table.to_dict(), "query": self.query}


class Answer(BaseModel):
    """
    Decoded answer from the table-QA model.

    Example body:
        {"answer": "30", "coordinates": [[0, 1]], "cells": ["30"], "aggregator": "NONE"}
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    answer: str = Field(..., description="Answer text (may be aggregated, e.g. 'SUM > 30, 25')")
    coordinates: list[tuple[NonNegativeInt, NonNegativeInt]] = Field(
        default_factory=list,
        description="Zero-based (row, column) positions of the supporting cells",
    )
    cells: list[str] = Field(
        default_factory=list,
        description="Literal values of the supporting cells",
    )
    aggregator: Aggregator = Field(..., description="Aggregation operator applied to the cells")

    @model_validator(mode="after")
    def check_cells_match_coordinates(self) -> "Answer":
        """coordinates and cells are parallel when both are present."""
        if self.coordinates and self.cells and len(self.coordinates) != len(self.cells):
            raise ValueError(
                f"coordinates ({len(self.coordinates)}) and cells ({len(self.cells)}) "
                f"must have the same length"
            )
        return self
