"""
Header recognition patterns for story spreadsheets.

Each canonical field has one anchored, case-insensitive pattern. Patterns are
tried in declaration order and the first match decides, so a header such as
"Outcome" that fits both the benefit and the Then column resolves to benefit.
A "." in a synonym accepts any single separator ("story id", "story_id",
"story-id").
"""
import re
from typing import Optional, Pattern, Tuple

from core.domain.story import FieldKey


# =============================================================================
# FIELD PATTERNS (ordered - first match wins)
# =============================================================================

FIELD_PATTERNS: Tuple[Tuple[FieldKey, Pattern[str]], ...] = (
    (FieldKey.IDENTIFIER, re.compile(r'^(id|story.?id|user.?story.?id)$', re.IGNORECASE)),
    (FieldKey.DESCRIPTION, re.compile(r'^(description|story.?description|title|story|summary)$', re.IGNORECASE)),
    (FieldKey.ACTOR_ROLE, re.compile(r'^(as.?a|role|user.?role|persona|user.?type|actor)$', re.IGNORECASE)),
    (FieldKey.DESIRED_ACTION, re.compile(r'^(i.?want|want|goal|objective)$', re.IGNORECASE)),
    (FieldKey.BENEFIT, re.compile(r'^(so.?that|benefit|value|outcome)$', re.IGNORECASE)),
    (FieldKey.ACCEPTANCE_CRITERIA, re.compile(r'^(acceptance.?criteria|ac|criteria|acceptance)$', re.IGNORECASE)),
    (FieldKey.REQUIREMENTS, re.compile(r'^(requirements?|req|specification|business.?rules?)$', re.IGNORECASE)),
    (FieldKey.PRECONDITION, re.compile(r'^(given|precondition|setup)$', re.IGNORECASE)),
    (FieldKey.TRIGGER, re.compile(r'^(when|action|step|trigger|event)$', re.IGNORECASE)),
    (FieldKey.OUTCOME, re.compile(r'^(then|expected|result|outcome)$', re.IGNORECASE)),
    (FieldKey.NOTES, re.compile(r'^(notes?|comments?|remarks?)$', re.IGNORECASE)),
    (FieldKey.ACCEPTANCE_CRITERIA_ID, re.compile(r'^(ac.?id|criteria.?id|acceptance.?id)$', re.IGNORECASE)),
    (FieldKey.TAGS, re.compile(r'^(tags?|labels?|categor(?:y|ies))$', re.IGNORECASE)),
    (FieldKey.PRIORITY, re.compile(r'^(priority|importance|level)$', re.IGNORECASE)),
)


def normalize_header(header: str) -> str:
    """Trim and lowercase a header cell."""
    return header.strip().lower()


def match_field(header: str) -> Optional[FieldKey]:
    """Return the first field whose pattern matches the header text."""
    clean_header = normalize_header(header)
    if not clean_header:
        return None

    for field_key, pattern in FIELD_PATTERNS:
        if pattern.match(clean_header):
            return field_key
    return None
