"""
User Story domain entities.

A spreadsheet row is normalized into a ``StoryRecord`` through a
``ColumnMapping`` that resolves each semantic ``FieldKey`` to a column index.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class FieldKey(str, Enum):
    """Canonical semantic slots a spreadsheet column may be mapped to.

    Declaration order is the header matching precedence.
    """
    IDENTIFIER = "story_id"
    DESCRIPTION = "description"
    ACTOR_ROLE = "actor_role"
    DESIRED_ACTION = "desired_action"
    BENEFIT = "benefit"
    ACCEPTANCE_CRITERIA = "acceptance_criteria"
    REQUIREMENTS = "requirements"
    PRECONDITION = "given"
    TRIGGER = "when"
    OUTCOME = "then"
    NOTES = "notes"
    ACCEPTANCE_CRITERIA_ID = "acceptance_criteria_id"
    TAGS = "tags"
    PRIORITY = "priority"


REQUIRED_FIELDS: Tuple[FieldKey, ...] = (
    FieldKey.DESCRIPTION,
    FieldKey.PRECONDITION,
    FieldKey.TRIGGER,
    FieldKey.OUTCOME,
)

# Messages shared by the row normalizer and the record validator
REQUIRED_FIELD_MESSAGES: Dict[FieldKey, str] = {
    FieldKey.DESCRIPTION: "Description is required",
    FieldKey.PRECONDITION: "Given condition is required",
    FieldKey.TRIGGER: "When action is required",
    FieldKey.OUTCOME: "Then result is required",
}

DEFAULT_ACTOR_ROLE = "User"
DEFAULT_BENEFIT = "I can achieve my goal"


class Priority(str, Enum):
    """Story and test case priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, value: Any) -> "Priority":
        """Parse free text into a priority, defaulting to MEDIUM."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value == text:
                return member
        return cls.MEDIUM


def synthesize_story_id(row_number: int) -> str:
    """Positional identifier used when a row carries no ID cell."""
    return f"US-{row_number:03d}"


@dataclass(frozen=True)
class ColumnMapping:
    """Resolved FieldKey -> zero-based column index table for one sheet.

    Fields not present in the header are simply absent. A mapping without
    every required field cannot be constructed.
    """
    indices: Mapping[FieldKey, int]

    def __post_init__(self):
        """Freeze the table and enforce the required field set."""
        frozen = MappingProxyType(dict(self.indices))
        object.__setattr__(self, "indices", frozen)

        missing = [f.value for f in REQUIRED_FIELDS if f not in frozen]
        if missing:
            raise ValueError(f"Column mapping is missing required fields: {', '.join(missing)}")

    def index_of(self, field_key: FieldKey) -> Optional[int]:
        return self.indices.get(field_key)

    def is_mapped(self, field_key: FieldKey) -> bool:
        return field_key in self.indices

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {key.value: self.indices.get(key) for key in FieldKey}


@dataclass(frozen=True)
class StoryRecord:
    """One normalized Given/When/Then user story."""
    story_id: str
    description: str
    given: str
    when: str
    then: str
    actor_role: str = DEFAULT_ACTOR_ROLE
    desired_action: str = ""
    benefit: str = DEFAULT_BENEFIT
    acceptance_criteria: str = ""
    requirements: str = ""
    notes: str = ""
    acceptance_criteria_id: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    priority: Priority = Priority.MEDIUM

    def __post_init__(self):
        """Validate story after initialization."""
        if not self.story_id:
            raise ValueError("Story ID cannot be empty")
        for required in REQUIRED_FIELDS:
            if not str(getattr(self, required.value) or "").strip():
                raise ValueError(REQUIRED_FIELD_MESSAGES[required])

        if not self.desired_action:
            object.__setattr__(self, "desired_action", self.description)
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "priority", Priority.parse(self.priority))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire field names consumers expect."""
        return {
            "id": self.story_id,
            "description": self.description,
            "asA": self.actor_role,
            "iWant": self.desired_action,
            "soThat": self.benefit,
            "acceptanceCriteria": self.acceptance_criteria,
            "requirements": self.requirements,
            "given": self.given,
            "when": self.when,
            "then": self.then,
            "notes": self.notes,
            "acId": self.acceptance_criteria_id,
            "tags": list(self.tags),
            "priority": self.priority.value,
        }
