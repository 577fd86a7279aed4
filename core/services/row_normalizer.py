"""
Row normalizer.

Turns one raw spreadsheet row into a StoryRecord, a skip marker for blank
rows, or a RowError naming the first missing required field.
"""
from typing import Any, List, Optional, Sequence, Union

from core.domain.errors import ROW_SKIPPED, RowError
from core.domain.story import (
    DEFAULT_ACTOR_ROLE,
    DEFAULT_BENEFIT,
    REQUIRED_FIELD_MESSAGES,
    REQUIRED_FIELDS,
    ColumnMapping,
    FieldKey,
    Priority,
    StoryRecord,
    synthesize_story_id,
)


def stringify_cell(value: Any) -> str:
    """Render a raw cell value as trimmed text."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def split_tags(text: str) -> List[str]:
    """Split a comma separated tag cell."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]


class RowNormalizer:
    """Converts raw rows into validated story records.

    Tags and priority are always defaulted (empty, medium) unless
    ``parse_tags_and_priority`` is enabled, in which case the mapped tag and
    priority columns are read.
    """

    def __init__(self, parse_tags_and_priority: bool = False):
        self.parse_tags_and_priority = parse_tags_and_priority

    def normalize(
        self,
        row: Optional[Sequence[Any]],
        mapping: ColumnMapping,
        row_number: int
    ) -> Union[StoryRecord, RowError, object]:
        """Normalize one data row.

        Args:
            row: Raw cells for the row
            mapping: Column mapping for the sheet
            row_number: Sheet row number (header is row 1), used for the
                fallback identifier

        Returns:
            StoryRecord, ROW_SKIPPED for a blank row, or RowError
        """
        cells = list(row or [])

        def cell(field_key: FieldKey) -> str:
            index = mapping.index_of(field_key)
            if index is None or index >= len(cells):
                return ""
            return stringify_cell(cells[index])

        required = {field_key: cell(field_key) for field_key in REQUIRED_FIELDS}

        if not any(required.values()):
            return ROW_SKIPPED

        for field_key in REQUIRED_FIELDS:
            if not required[field_key]:
                return RowError(message=REQUIRED_FIELD_MESSAGES[field_key], field=field_key)

        description = required[FieldKey.DESCRIPTION]
        tags: List[str] = []
        priority = Priority.MEDIUM
        if self.parse_tags_and_priority:
            tags = split_tags(cell(FieldKey.TAGS))
            priority = Priority.parse(cell(FieldKey.PRIORITY))

        return StoryRecord(
            story_id=cell(FieldKey.IDENTIFIER) or synthesize_story_id(row_number),
            description=description,
            given=required[FieldKey.PRECONDITION],
            when=required[FieldKey.TRIGGER],
            then=required[FieldKey.OUTCOME],
            actor_role=cell(FieldKey.ACTOR_ROLE) or DEFAULT_ACTOR_ROLE,
            desired_action=cell(FieldKey.DESIRED_ACTION) or description,
            benefit=cell(FieldKey.BENEFIT) or DEFAULT_BENEFIT,
            acceptance_criteria=cell(FieldKey.ACCEPTANCE_CRITERIA),
            requirements=cell(FieldKey.REQUIREMENTS),
            notes=cell(FieldKey.NOTES),
            acceptance_criteria_id=cell(FieldKey.ACCEPTANCE_CRITERIA_ID),
            tags=tuple(tags),
            priority=priority,
        )
