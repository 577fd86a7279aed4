"""
Parse report for one spreadsheet.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.domain.story import StoryRecord


@dataclass(frozen=True)
class ParseReport:
    """Result of normalizing one sheet, including partial failures."""
    success: bool
    stories: List[StoryRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    total_rows: int = 0
    valid_rows: int = 0

    def __post_init__(self):
        if self.valid_rows != len(self.stories):
            raise ValueError(
                f"valid_rows ({self.valid_rows}) must equal the number of stories ({len(self.stories)})"
            )

    @classmethod
    def fatal(cls, message: str, total_rows: int = 0) -> "ParseReport":
        """Report for a sheet that could not be processed at all."""
        return cls(success=False, stories=[], errors=[message], total_rows=total_rows, valid_rows=0)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "userStories": [story.to_dict() for story in self.stories],
            "errors": list(self.errors),
            "summary": {
                "totalRows": self.total_rows,
                "validRows": self.valid_rows,
                "errorCount": self.error_count,
            },
        }
