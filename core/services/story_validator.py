"""
Story Record Validator

Structural validation for a single user story, usable outside sheet parsing
(e.g. for one record submitted by a caller). Missing required fields are
ERROR issues; Given/When/Then keyword mismatches are WARNING issues. Both are
listed in ``errors``.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from core.domain.story import REQUIRED_FIELD_MESSAGES, REQUIRED_FIELDS, FieldKey, StoryRecord


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One validation finding."""
    message: str
    field: FieldKey
    severity: ValidationSeverity


@dataclass
class ValidationResult:
    """Result of validating one story."""
    is_valid: bool
    errors: List[str]
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def has_required_fields(self) -> bool:
        """True when only advisory findings were raised."""
        return not any(issue.severity == ValidationSeverity.ERROR for issue in self.issues)

    @property
    def warnings(self) -> List[str]:
        return [i.message for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.is_valid, "errors": list(self.errors)}


# Keys accepted for each checked field on externally supplied records
FIELD_ALIASES: Dict[FieldKey, tuple] = {
    FieldKey.IDENTIFIER: ("story_id", "id"),
    FieldKey.DESCRIPTION: ("description",),
    FieldKey.PRECONDITION: ("given", "precondition"),
    FieldKey.TRIGGER: ("when", "trigger"),
    FieldKey.OUTCOME: ("then", "outcome"),
}

# (field, expected leading keyword, message)
KEYWORD_CONVENTIONS = (
    (FieldKey.PRECONDITION, "given", 'Given condition should start with "Given"'),
    (FieldKey.TRIGGER, "when", 'When action should start with "When"'),
    (FieldKey.OUTCOME, "then", 'Then result should start with "Then"'),
)

StoryLike = Union[StoryRecord, Mapping[str, Any]]


class StoryValidator:
    """Validates story records against the Given/When/Then structure."""

    def validate(self, record: StoryLike) -> ValidationResult:
        """
        Validate a single story.

        Args:
            record: StoryRecord or a mapping with wire (``given``) or
                snake_case keys; missing keys count as empty

        Returns:
            ValidationResult listing every finding
        """
        issues: List[ValidationIssue] = []

        for field_key in REQUIRED_FIELDS:
            if not _field_text(record, field_key).strip():
                issues.append(ValidationIssue(
                    message=REQUIRED_FIELD_MESSAGES[field_key],
                    field=field_key,
                    severity=ValidationSeverity.ERROR,
                ))

        for field_key, keyword, message in KEYWORD_CONVENTIONS:
            text = _field_text(record, field_key).strip()
            if text and not text.lower().startswith(keyword):
                issues.append(ValidationIssue(
                    message=message,
                    field=field_key,
                    severity=ValidationSeverity.WARNING,
                ))

        errors = [issue.message for issue in issues]
        return ValidationResult(is_valid=len(errors) == 0, errors=errors, issues=issues)

    def validate_batch(self, records: Iterable[StoryLike]) -> Dict[str, ValidationResult]:
        """
        Validate several stories.

        Returns:
            Dict mapping story ID (or ``#<index>`` when absent) to its result
        """
        results: Dict[str, ValidationResult] = {}
        for index, record in enumerate(records):
            story_id = _field_text(record, FieldKey.IDENTIFIER) or f"#{index}"
            results[story_id] = self.validate(record)
        return results


def _field_text(record: StoryLike, field_key: FieldKey) -> str:
    if isinstance(record, StoryRecord):
        value: Optional[Any] = getattr(record, field_key.value)
    else:
        value = None
        for key in FIELD_ALIASES[field_key]:
            if record.get(key) is not None:
                value = record.get(key)
                break
    if value is None:
        return ""
    return str(value)
