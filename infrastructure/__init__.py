"""
Infrastructure layer - implementations of interfaces.

Contains:
- spreadsheet: Workbook and CSV readers (story source)
"""
from .spreadsheet import WorkbookReader

__all__ = [
    # Spreadsheet
    'WorkbookReader',
]
