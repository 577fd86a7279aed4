"""
Spreadsheet reader interface.

Decodes a spreadsheet container into the raw cell grid the story parser
consumes.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Union


class ISpreadsheetReader(ABC):
    """Interface for spreadsheet decoding."""

    @abstractmethod
    def read_grid(self, source: Union[str, Path]) -> List[List[Any]]:
        """Read the first sheet as rows of raw cell values.

        Args:
            source: Path to the spreadsheet file

        Returns:
            Rows of cell values, header row first

        Raises:
            SpreadsheetReadError: If the file cannot be decoded
        """
        pass
