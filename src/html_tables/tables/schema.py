"""Pydantic models for extracted tables.

Right after parsing, cells keep the colspan/rowspan values found in the
markup.  After ``grid.span`` every row has the same number of cells and every
cell spans exactly one row and one column.
"""

from pydantic import BaseModel, Field

from html_tables.context.schema import ContentHierarchy
from html_tables.text.schema import RichText


class Cell(BaseModel):
    """One ``td``/``th`` cell."""

    is_header: bool = False
    rowspan: int = 1
    colspan: int = 1
    attrs: dict[str, str] = Field(default_factory=dict)
    value: RichText = Field(default_factory=RichText.empty)
    html: str = ""


class Row(BaseModel):
    cells: list[Cell] = Field(default_factory=list)
    attrs: dict[str, str] = Field(default_factory=dict)


class Table(BaseModel):
    """A table with its provenance and surrounding section context."""

    id: str = ""
    url: str = ""
    caption: str = ""
    attrs: dict[str, str] = Field(default_factory=dict)
    context: list[ContentHierarchy] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)

    @property
    def shape(self) -> tuple[int, int]:
        """(number of rows, widest row)."""
        return len(self.rows), max((len(row.cells) for row in self.rows), default=0)

    def is_regular(self) -> bool:
        """True if every row has the same number of cells."""
        return len({len(row.cells) for row in self.rows}) <= 1

    def to_list(self) -> list[list[str]]:
        """Return the grid as rows of plain cell text."""
        return [[cell.value.get_text() for cell in row.cells] for row in self.rows]

    def to_dict(self) -> dict:
        return self.model_dump()
