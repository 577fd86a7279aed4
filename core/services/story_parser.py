"""
Batch parser for story spreadsheets.

Drives the column mapper once per sheet and the row normalizer once per data
row. Only a sheet without data or with unmappable headers is fatal; row
failures are collected as ``Row <n>: <message>`` errors.
"""
import time
from typing import Any, List, Optional, Sequence

from core.domain.errors import MappingRejected, RowError
from core.domain.parse_report import ParseReport
from core.domain.story import StoryRecord
from core.services.column_mapper import ColumnMapper
from core.services.metrics.logger import StructuredLogger
from core.services.row_normalizer import RowNormalizer


TOO_FEW_ROWS_MESSAGE = "File must contain at least a header row and one data row"

# Sheet row number of the first data row (header is row 1)
FIRST_DATA_ROW_NUMBER = 2


class StorySheetParser:
    """Parses a 2-D cell grid into a ParseReport."""

    def __init__(
        self,
        mapper: Optional[ColumnMapper] = None,
        normalizer: Optional[RowNormalizer] = None
    ):
        self.mapper = mapper or ColumnMapper()
        self.normalizer = normalizer or RowNormalizer()
        self._log = StructuredLogger("parsing")

    def parse(self, grid: Sequence[Sequence[Any]]) -> ParseReport:
        """Parse a sheet.

        Args:
            grid: Rows of raw cell values, header first

        Returns:
            ParseReport with stories in row order and row-scoped errors
        """
        started = time.perf_counter()
        rows = list(grid or [])
        total_rows = max(len(rows) - 1, 0)

        if len(rows) < 2:
            report = ParseReport.fatal(TOO_FEW_ROWS_MESSAGE, total_rows=total_rows)
            return self._finish(report, started)

        mapping = self.mapper.map(rows[0])
        if isinstance(mapping, MappingRejected):
            self._log.warning(
                "column_mapping_rejected",
                missing_fields=[f.value for f in mapping.missing_fields]
            )
            report = ParseReport.fatal(mapping.message, total_rows=total_rows)
            return self._finish(report, started)

        self._log.debug("column_mapping_detected", mapping=mapping.to_dict())

        stories: List[StoryRecord] = []
        errors: List[str] = []

        for offset, row in enumerate(rows[1:]):
            row_number = offset + FIRST_DATA_ROW_NUMBER
            outcome = self.normalizer.normalize(row, mapping, row_number)

            if isinstance(outcome, StoryRecord):
                stories.append(outcome)
            elif isinstance(outcome, RowError):
                message = f"Row {row_number}: {outcome.message}"
                errors.append(message)
                self._log.warning("row_rejected", row_number=row_number, reason=outcome.message)

        report = ParseReport(
            success=len(errors) == 0,
            stories=stories,
            errors=errors,
            total_rows=total_rows,
            valid_rows=len(stories),
        )
        return self._finish(report, started)

    def _finish(self, report: ParseReport, started: float) -> ParseReport:
        self._log.log_parsing(
            total_rows=report.total_rows,
            valid_rows=report.valid_rows,
            error_count=report.error_count,
            duration_ms=(time.perf_counter() - started) * 1000,
            success=report.success,
        )
        return report
