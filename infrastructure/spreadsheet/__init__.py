"""
Spreadsheet decoding for story import.
"""
from .workbook_reader import SUPPORTED_EXTENSIONS, WorkbookReader

__all__ = ['SUPPORTED_EXTENSIONS', 'WorkbookReader']
