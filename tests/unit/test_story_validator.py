"""Tests for StoryValidator."""
import pytest

from core.domain.story import FieldKey, StoryRecord
from core.services.story_validator import StoryValidator, ValidationSeverity


class TestStoryValidator:
    """Tests for single record validation."""

    def setup_method(self):
        self.validator = StoryValidator()

    def test_well_formed_story_is_valid(self, booking_story):
        """A story whose clauses start with their keywords passes."""
        result = self.validator.validate(booking_story)

        assert result.is_valid is True
        assert result.errors == []

    def test_missing_fields_listed_in_order(self):
        """Every missing required field is reported, in check order."""
        result = self.validator.validate({"description": "", "given": None})

        assert result.is_valid is False
        assert result.errors == [
            "Description is required",
            "Given condition is required",
            "When action is required",
            "Then result is required",
        ]
        assert all(i.severity == ValidationSeverity.ERROR for i in result.issues)
        assert result.has_required_fields is False

    def test_whitespace_counts_as_missing(self):
        result = self.validator.validate({
            "description": "   ", "given": "Given a", "when": "When b", "then": "Then c"
        })

        assert result.errors == ["Description is required"]

    def test_keyword_prefix_warnings(self):
        """Clauses without their Gherkin keyword produce warnings that still fail validation."""
        result = self.validator.validate({
            "description": "Pay",
            "given": "a booking exists",
            "when": "the user pays",
            "then": "a ticket is issued",
        })

        assert result.is_valid is False
        assert result.errors == [
            'Given condition should start with "Given"',
            'When action should start with "When"',
            'Then result should start with "Then"',
        ]
        assert result.has_required_fields is True
        assert len(result.warnings) == 3

    def test_keyword_check_is_case_insensitive(self):
        result = self.validator.validate({
            "description": "Pay",
            "given": "GIVEN a booking",
            "when": "  when the user pays",
            "then": "then a ticket is issued",
        })

        assert result.is_valid is True

    def test_missing_and_prefix_findings_combined(self):
        """Missing fields are not also reported for their prefix."""
        result = self.validator.validate({"description": "Pay", "given": "a booking", "when": "When x"})

        assert result.errors == [
            "Then result is required",
            'Given condition should start with "Given"',
        ]
        assert [i.field for i in result.issues] == [FieldKey.OUTCOME, FieldKey.PRECONDITION]

    def test_alias_keys_accepted(self):
        """Mappings may use snake_case field names."""
        result = self.validator.validate({
            "description": "Pay",
            "precondition": "Given a",
            "trigger": "When b",
            "outcome": "Then c",
        })

        assert result.is_valid is True

    def test_to_dict(self):
        result = self.validator.validate({"description": "x", "given": "Given", "when": "When", "then": "Then"})

        assert result.to_dict() == {"valid": True, "errors": []}

    def test_validate_batch_keys_by_id(self, booking_story):
        """Batch results are keyed by story id, or position when absent."""
        results = self.validator.validate_batch([booking_story, {"description": "x"}])

        assert set(results) == {"US-101", "#1"}
        assert results["US-101"].is_valid is True
        assert results["#1"].is_valid is False


class TestStoryRecordInvariants:
    """StoryRecord refuses to hold an incomplete story."""

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError, match="Story ID"):
            StoryRecord(story_id="", description="d", given="g", when="w", then="t")

    def test_required_field_rejected(self):
        with pytest.raises(ValueError, match="When action is required"):
            StoryRecord(story_id="1", description="d", given="g", when=" ", then="t")

    def test_to_dict_uses_wire_names(self, booking_story):
        data = booking_story.to_dict()

        assert data["id"] == "US-101"
        assert data["asA"] == "travel agent"
        assert data["iWant"] == "Create group booking request"
        assert data["soThat"] == "I can achieve my goal"
        assert data["tags"] == ["booking"]
        assert data["priority"] == "medium"
