"""Named record types for the scouting sheets.

Sheet rows are positional; this module is the only place that knows the column
offsets. Everything downstream works with the named fields.
"""
from datetime import datetime
from typing import Any, Sequence

from pydantic import BaseModel

from scouting.workbook import ACCELERATOR_SHEET, STARTUP_SHEET, Workbook

# Column offsets (0-based) shared by both data sheets
_NAME = 1
_COUNTRY = 2
_SECTOR = 3  # "focus" on the accelerator sheet
_DESCRIPTION = 5


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def _text(value: Any) -> str:
    """Cell value as text; blank cells become ''."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class StartupRecord(BaseModel):
    row_number: int
    id: str
    name: str
    country: str
    sector: str
    description: str

    @classmethod
    def from_row(cls, row: Sequence[Any], row_number: int) -> "StartupRecord":
        return cls(
            row_number=row_number,
            id=_text(_cell(row, 0)),
            name=_text(_cell(row, _NAME)),
            country=_text(_cell(row, _COUNTRY)),
            sector=_text(_cell(row, _SECTOR)),
            description=_text(_cell(row, _DESCRIPTION)),
        )


class AcceleratorRecord(BaseModel):
    row_number: int
    id: str
    name: str
    country: str
    focus: str
    description: str

    @classmethod
    def from_row(cls, row: Sequence[Any], row_number: int) -> "AcceleratorRecord":
        return cls(
            row_number=row_number,
            id=_text(_cell(row, 0)),
            name=_text(_cell(row, _NAME)),
            country=_text(_cell(row, _COUNTRY)),
            focus=_text(_cell(row, _SECTOR)),
            description=_text(_cell(row, _DESCRIPTION)),
        )

    @property
    def info(self) -> str:
        """Text handed to the generator: focus and description."""
        return f"{self.focus} - {self.description}"


class ValuePropositionRecord(BaseModel):
    sequence_number: int
    startup_name: str
    accelerator_name: str
    match_score: float
    text: str
    generated_at: datetime

    def to_row(self) -> list[Any]:
        return [
            self.sequence_number,
            self.startup_name,
            self.accelerator_name,
            f"{self.match_score:.2f}",
            self.text,
            self.generated_at,
        ]


def _data_rows(workbook: Workbook, sheet_name: str) -> list[tuple[int, list[Any]]]:
    """Rows after the header, paired with their 1-based sheet row number."""
    values = workbook.require_sheet(sheet_name).get_values()
    return [(i, row) for i, row in enumerate(values[1:], 2)]


def load_startups(workbook: Workbook) -> list[StartupRecord]:
    return [StartupRecord.from_row(row, n) for n, row in _data_rows(workbook, STARTUP_SHEET)]


def load_accelerators(workbook: Workbook) -> list[AcceleratorRecord]:
    return [AcceleratorRecord.from_row(row, n) for n, row in _data_rows(workbook, ACCELERATOR_SHEET)]
