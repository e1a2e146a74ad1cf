"""Spreadsheet access: a small Workbook/Sheet interface and its openpyxl implementation.

Components never reach for a global document; they get a ``Workbook`` passed in
and look sheets up by name.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence

from openpyxl import Workbook as _OpenpyxlWorkbook, load_workbook
from openpyxl.styles import Font

logger = logging.getLogger(__name__)

CONFIG_SHEET = "Config"
STARTUP_SHEET = "Database Startup"
ACCELERATOR_SHEET = "Database Acceleratori"
RESULTS_SHEET = "Value Propositions"

STARTUP_HEADERS = ["ID", "Nome", "Paese", "Settore", "Stage", "Descrizione", "Sito web"]
ACCELERATOR_HEADERS = ["ID", "Nome", "Paese", "Focus", "Programma", "Descrizione"]
RESULTS_HEADERS = ["#", "Startup", "Acceleratore", "Match Score", "Value Proposition", "Data"]

CONFIG_TEMPLATE = [
    ("API Key", ""),
    ("Max tokens", 300),
    ("Modello", "llama-3.1-8b-instant"),
    ("Rate limit (ms)", 2000),
    ("Soglia match", 0.5),
]


class SheetMissingError(RuntimeError):
    """A sheet required by an operation does not exist in the workbook."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Scheda '{name}' non trovata")


class Sheet(ABC):
    """One named sheet; rows and columns are 1-based like the spreadsheet UI."""

    title: str

    @abstractmethod
    def get_values(self) -> list[list[Any]]:
        """All rows up to the last non-empty one, each padded to the used width."""
        pass

    @abstractmethod
    def get_value(self, cell: str) -> Any:
        """Value of a single A1-style cell, e.g. ``"B3"``."""
        pass

    @abstractmethod
    def last_row(self) -> int:
        """Index of the last non-empty row, 0 for an empty sheet."""
        pass

    @abstractmethod
    def append_row(self, values: Sequence[Any]) -> None:
        pass

    @abstractmethod
    def clear_data_rows(self) -> None:
        """Delete every row except the header."""
        pass


class Workbook(ABC):
    @abstractmethod
    def get_sheet(self, name: str) -> Sheet | None:
        pass

    def require_sheet(self, name: str) -> Sheet:
        sheet = self.get_sheet(name)
        if sheet is None:
            raise SheetMissingError(name)
        return sheet


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class XlsxSheet(Sheet):
    def __init__(self, workbook: "XlsxWorkbook", worksheet):
        self._workbook = workbook
        self._ws = worksheet
        self.title = worksheet.title

    def _rows(self) -> list[tuple]:
        return list(self._ws.iter_rows(values_only=True))

    def last_row(self) -> int:
        last = 0
        for i, row in enumerate(self._rows(), 1):
            if any(not _is_blank(v) for v in row):
                last = i
        return last

    def get_values(self) -> list[list[Any]]:
        rows = self._rows()[:self.last_row()]
        width = 0
        for row in rows:
            for j, v in enumerate(row, 1):
                if not _is_blank(v):
                    width = max(width, j)
        return [list(row[:width]) + [None] * (width - len(row)) for row in rows]

    def get_value(self, cell: str) -> Any:
        return self._ws[cell].value

    def append_row(self, values: Sequence[Any]) -> None:
        row = self.last_row() + 1
        for col, value in enumerate(values, 1):
            self._ws.cell(row=row, column=col, value=value)
        self._workbook.save()

    def clear_data_rows(self) -> None:
        last = self.last_row()
        if last > 1:
            self._ws.delete_rows(2, last - 1)
            logger.info("[SHEET] Cleared %d rows from '%s'", last - 1, self.title)
            self._workbook.save()


class XlsxWorkbook(Workbook):
    """An .xlsx file on disk. Every mutation is written through immediately."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._wb = load_workbook(self.path)

    def get_sheet(self, name: str) -> Sheet | None:
        if name not in self._wb.sheetnames:
            return None
        return XlsxSheet(self, self._wb[name])

    def save(self) -> None:
        self._wb.save(self.path)


def create_template(path: str | Path) -> Path:
    """Write an empty scouting workbook with the four expected sheets."""
    path = Path(path)
    wb = _OpenpyxlWorkbook()
    config_ws = wb.active
    config_ws.title = CONFIG_SHEET
    for row, (label, value) in enumerate(CONFIG_TEMPLATE, 1):
        config_ws.cell(row=row, column=1, value=label).font = Font(bold=True)
        config_ws.cell(row=row, column=2, value=value)
    config_ws.column_dimensions["A"].width = 18
    config_ws.column_dimensions["B"].width = 60

    for title, headers in (
        (STARTUP_SHEET, STARTUP_HEADERS),
        (ACCELERATOR_SHEET, ACCELERATOR_HEADERS),
        (RESULTS_SHEET, RESULTS_HEADERS),
    ):
        ws = wb.create_sheet(title)
        for col, header in enumerate(headers, 1):
            ws.cell(row=1, column=col, value=header).font = Font(bold=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info("[SHEET] Template workbook written to %s", path)
    return path
