"""
Header-to-field mapper.

Resolves which spreadsheet column holds each canonical story field.
"""
from typing import Any, Dict, Sequence, Union

from core.domain.errors import MappingRejected
from core.domain.story import REQUIRED_FIELDS, ColumnMapping, FieldKey
from core.services.field_patterns import match_field


MAPPING_REJECTED_MESSAGE = (
    "Unable to detect required columns. Please ensure your spreadsheet has "
    "Description, Given, When and Then headers."
)


class ColumnMapper:
    """Builds a ColumnMapping from one header row."""

    def map(self, header_row: Sequence[Any]) -> Union[ColumnMapping, MappingRejected]:
        """Map header cells to fields.

        Headers are scanned left to right. Each header is assigned the first
        field whose pattern matches; when that field was already claimed by an
        earlier column the header is ignored. Non-string cells never match.

        Args:
            header_row: Raw header cells

        Returns:
            ColumnMapping, or MappingRejected when a required field is missing
        """
        indices: Dict[FieldKey, int] = {}

        for index, header in enumerate(header_row or []):
            if not isinstance(header, str):
                continue

            field_key = match_field(header)
            if field_key is None or field_key in indices:
                continue
            indices[field_key] = index

        missing = [field_key for field_key in REQUIRED_FIELDS if field_key not in indices]
        if missing:
            return MappingRejected(message=MAPPING_REJECTED_MESSAGE, missing_fields=missing)

        return ColumnMapping(indices)
