"""Tests for the prompt builder."""
import json

import pytest

from core.domain.story import Priority, StoryRecord
from core.domain.test_case import GenerationContext, TestingScope
from core.services.llm.prompt_builder import (
    BUSINESS_RULES,
    MODULE_DESCRIPTIONS,
    OUTPUT_SCHEMA,
    UNKNOWN_MODULE_DESCRIPTION,
    USER_TYPE_CONTEXTS,
    PromptBuilder,
    build_prompt,
    build_prompts,
    describe_module,
    describe_user_type,
)


# =============================================================================
# LOOKUP TABLES
# =============================================================================

class TestLookupTables:
    """Tests for the module and user type vocabularies."""

    def test_fourteen_modules(self):
        assert len(MODULE_DESCRIPTIONS) == 14
        assert "payment_processing" in MODULE_DESCRIPTIONS

    def test_three_user_types(self):
        assert set(USER_TYPE_CONTEXTS) == {"airline_user", "travel_agent", "retail_user"}

    def test_unknown_module_uses_fallback(self):
        assert describe_module("loyalty") == UNKNOWN_MODULE_DESCRIPTION

    def test_user_type_lookup_is_case_insensitive(self):
        assert describe_user_type("Travel_Agent") == USER_TYPE_CONTEXTS["travel_agent"]

    def test_unknown_user_type_is_empty(self):
        assert describe_user_type("pilot") == ""
        assert describe_user_type("") == ""


# =============================================================================
# PROMPT RENDERING
# =============================================================================

class TestPromptBuilder:
    """Tests for rendered prompt content."""

    @pytest.fixture
    def context(self):
        story = StoryRecord(
            story_id="US-42",
            description="Split a group booking",
            given="Given a PNR with 20 passengers",
            when="When the agent divides 5 passengers",
            then="Then a new PNR is created",
            acceptance_criteria="Both PNRs keep the fare",
            notes="Check fare rules",
            acceptance_criteria_id="AC-9",
            tags=("divide", "pnr"),
            priority=Priority.HIGH,
        )
        return GenerationContext(
            user_stories=[story],
            selected_modules=["divide", "loyalty"],
            user_type="airline_user",
            testing_scope=TestingScope.REGRESSION,
            include_security_tests=True,
        )

    def test_system_prompt_carries_output_contract(self, context):
        """The system prompt embeds the JSON schema once."""
        system_prompt = PromptBuilder(context).build_system_prompt()

        assert "## OUTPUT CONTRACT" in system_prompt
        assert json.dumps(OUTPUT_SCHEMA, indent=2) in system_prompt

    def test_user_prompt_sections_in_order(self, context):
        """Sections appear in the documented order."""
        user_prompt = PromptBuilder(context).build_user_prompt()
        headings = [
            "AIRLINE BUSINESS RULES:",
            "USER TYPE: airline_user",
            "MODULES: divide, loyalty",
            "TESTING SCOPE: regression",
            "USER STORIES TO CONVERT:",
            "REQUIREMENTS:",
            "OUTPUT FORMAT:",
        ]
        positions = [user_prompt.index(h) for h in headings]

        assert positions == sorted(positions)

    def test_business_rules_rendered(self, context):
        user_prompt = PromptBuilder(context).build_user_prompt()

        for rule in BUSINESS_RULES:
            assert f"- {rule}" in user_prompt

    def test_module_descriptions_with_fallback(self, context):
        user_prompt = PromptBuilder(context).build_user_prompt()

        assert f"divide: {MODULE_DESCRIPTIONS['divide']}" in user_prompt
        assert f"loyalty: {UNKNOWN_MODULE_DESCRIPTION}" in user_prompt

    def test_user_type_capabilities(self, context):
        user_prompt = PromptBuilder(context).build_user_prompt()

        assert USER_TYPE_CONTEXTS["airline_user"] in user_prompt

    def test_options_serialized(self, context):
        user_prompt = PromptBuilder(context).build_user_prompt()

        assert "- Include Negative Tests: true" in user_prompt
        assert "- Include Performance Tests: false" in user_prompt
        assert "- Include Security Tests: true" in user_prompt
        assert json.dumps(context.options(), sort_keys=True) in user_prompt

    def test_every_story_field_rendered(self, context):
        user_prompt = PromptBuilder(context).build_user_prompt()

        for expected in [
            "ID: US-42",
            "Description: Split a group booking",
            "As a: User",
            "I want: Split a group booking",
            "So that: I can achieve my goal",
            "Given: Given a PNR with 20 passengers",
            "When: When the agent divides 5 passengers",
            "Then: Then a new PNR is created",
            "Acceptance Criteria: Both PNRs keep the fare",
            "Notes: Check fare rules",
            "AC ID: AC-9",
            "Tags: divide, pnr",
            "Priority: high",
        ]:
            assert expected in user_prompt

    def test_rendering_is_deterministic(self, context):
        """Identical contexts render identical prompts."""
        assert build_prompts(context) == build_prompts(context)
        assert build_prompt(context) == build_prompt(context)

    def test_build_prompt_joins_system_and_user(self, context):
        system_prompt, user_prompt = build_prompts(context)

        assert build_prompt(context) == f"{system_prompt}\n\n{user_prompt}"
