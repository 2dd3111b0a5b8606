# src/ktop/models/table.py

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TableModel(BaseModel):
    """
    A header plus rows of pre-formatted text cells.

    Every row must have exactly as many cells as the header.
    """

    model_config = ConfigDict(frozen=True)

    header: List[str] = Field(..., min_length=1, description="Column labels.")
    rows: List[List[str]] = Field(default_factory=list, description="Data rows, in display order.")

    @model_validator(mode="after")
    def _check_row_widths(self):
        width = len(self.header)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"Row {index} has {len(row)} cells, expected {width}.")
        return self

    @property
    def column_count(self) -> int:
        return len(self.header)
