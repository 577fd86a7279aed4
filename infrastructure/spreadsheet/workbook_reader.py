"""
Workbook Reader
Decodes .xlsx/.xlsm workbooks (via openpyxl) and .csv files into a cell grid.
"""
import csv
from pathlib import Path
from typing import Any, List, Sequence, Union
from zipfile import BadZipFile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from core.domain.errors import SpreadsheetReadError
from core.interfaces.spreadsheet_reader import ISpreadsheetReader

WORKBOOK_EXTENSIONS = {'.xlsx', '.xlsm'}
CSV_EXTENSIONS = {'.csv'}
SUPPORTED_EXTENSIONS = WORKBOOK_EXTENSIONS | CSV_EXTENSIONS


class WorkbookReader(ISpreadsheetReader):
    """Reads the first worksheet of a spreadsheet file.

    Empty cells become ``""`` and fully blank rows are dropped. Numbers and
    dates are returned as openpyxl yields them (formula results, not formulas).
    """

    def read_grid(self, source: Union[str, Path]) -> List[List[Any]]:
        path = Path(source)
        extension = path.suffix.lower()

        if extension not in SUPPORTED_EXTENSIONS:
            raise SpreadsheetReadError(
                f"Unsupported file type '{extension or path.name}'. "
                f"Expected one of: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
            )
        if not path.is_file():
            raise SpreadsheetReadError(f"File not found: {path}")

        if extension in CSV_EXTENSIONS:
            rows = self._read_csv(path)
        else:
            rows = self._read_workbook(path)

        return [_clean_row(row) for row in rows if not _is_blank(row)]

    def _read_workbook(self, path: Path) -> List[Sequence[Any]]:
        try:
            wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
            raise SpreadsheetReadError(f"Cannot open workbook {path.name}: {e}")

        try:
            if not wb.worksheets:
                raise SpreadsheetReadError(f"Workbook {path.name} has no worksheets")
            sheet = wb.worksheets[0]
            return [row for row in sheet.iter_rows(values_only=True)]
        finally:
            wb.close()

    def _read_csv(self, path: Path) -> List[Sequence[Any]]:
        try:
            with open(path, newline='', encoding='utf-8-sig') as f:
                return [row for row in csv.reader(f)]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SpreadsheetReadError(f"Cannot read CSV {path.name}: {e}")


def _is_blank(row: Sequence[Any]) -> bool:
    return all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row)


def _clean_row(row: Sequence[Any]) -> List[Any]:
    return ["" if cell is None else cell for cell in row]
