"""
Use case: Import user stories from a spreadsheet file.
"""
from pathlib import Path
from typing import Optional, Union

from core.domain.errors import SpreadsheetReadError
from core.domain.parse_report import ParseReport
from core.interfaces.spreadsheet_reader import ISpreadsheetReader
from core.services.metrics.logger import StructuredLogger
from core.services.story_parser import StorySheetParser

logger = StructuredLogger("use_cases.import_stories")


class ImportStoriesUseCase:
    """Reads a spreadsheet and parses its first sheet into stories."""

    def __init__(self, reader: ISpreadsheetReader, parser: Optional[StorySheetParser] = None):
        """Initialize use case with dependencies.

        Args:
            reader: Decodes the file into a cell grid
            parser: Sheet parser (default configuration when omitted)
        """
        self.reader = reader
        self.parser = parser or StorySheetParser()

    def execute(self, source: Union[str, Path]) -> ParseReport:
        """Execute the import.

        Args:
            source: Path to an .xlsx, .xlsm or .csv file

        Returns:
            ParseReport; an unreadable file yields a fatal report
        """
        try:
            grid = self.reader.read_grid(source)
        except SpreadsheetReadError as e:
            logger.warning("spreadsheet_read_failed", source=str(source), error=str(e))
            return ParseReport.fatal(f"Failed to parse spreadsheet: {e}")

        return self.parser.parse(grid)
