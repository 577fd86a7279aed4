#!/usr/bin/env python3
"""
Prompt Builder for Airline Booking Test Generation

Deterministic rendering of the instruction payload sent to remote providers:
- SYSTEM prompt: role + output contract
- USER prompt: business rules, user type, modules, options, stories,
  requirements, output format

No I/O and no randomness: identical contexts always render identical text.
"""
from typing import Dict, List, Tuple
import json

from core.domain.story import StoryRecord
from core.domain.test_case import GenerationContext


# =============================================================================
# DOMAIN VOCABULARY
# =============================================================================

MODULE_DESCRIPTIONS: Dict[str, str] = {
    'new_request': 'Initial booking request creation with passenger details, route selection, and fare calculation',
    'request_processing': 'Processing booking requests through workflow states and validation',
    'fare_approval': 'Fare validation, approval workflow, and pricing rule verification',
    'fare_quotation': 'Fare quoting for negotiated requests and special pricing',
    'rm_review': 'Revenue management review and approval processes',
    'payment_processing': 'Payment handling including single and split payments, PCI compliance',
    'name_list_update': 'Passenger name modifications and PNR updates',
    'ticketing': 'Ticket issuance, e-ticket generation, and delivery',
    'upsize': 'Adding passengers to existing bookings',
    'downsize': 'Removing passengers from bookings',
    'divide': 'Splitting bookings into separate PNRs',
    'change_itinerary': 'Route and schedule modifications',
    'partial_modify': 'Partial booking modifications',
    'negotiation': 'Fare negotiation workflows and approval chains',
}

UNKNOWN_MODULE_DESCRIPTION = 'Module functionality'

USER_TYPE_CONTEXTS: Dict[str, str] = {
    'airline_user': 'Full system access - can quote fares, approve requests, process payments, issue tickets, and perform all modifications',
    'travel_agent': 'Can raise requests, accept bookings, process payments, update name lists, and issue tickets',
    'retail_user': 'Limited access to basic booking functions and modifications',
}

BUSINESS_RULES: List[str] = [
    'PNR (Passenger Name Record) must be unique 6-character alphanumeric',
    'Booking references follow IATA standards',
    'Payment processing must comply with PCI DSS',
    'Fare rules include advance purchase, minimum stay, change penalties',
    'Route validation against published schedules and aircraft capacity',
    'Passenger names must match travel documents exactly',
    'Date format: ISO 8601 for system processing, localized for display',
    'Currency handling with proper exchange rates and rounding',
    'Seat inventory management and overbooking controls',
    'Check-in and boarding pass generation workflows',
]

GENERATION_REQUIREMENTS: List[str] = [
    'Generate comprehensive test cases for each user story',
    'Include positive and negative scenarios based on settings',
    'Use airline industry terminology and standards',
    'Consider PNR, booking references, fare rules, and payment processing',
    'Include data validation for passenger details, routes, dates',
    'Test workflow transitions between modules',
    'Consider user role permissions and access controls',
]


def describe_module(module: str) -> str:
    """Description for a module id, or the generic fallback."""
    return MODULE_DESCRIPTIONS.get(module, UNKNOWN_MODULE_DESCRIPTION)


def describe_user_type(user_type: str) -> str:
    """Capability description for a user type, empty when unknown."""
    return USER_TYPE_CONTEXTS.get((user_type or '').strip().lower(), '')


# =============================================================================
# OUTPUT CONTRACT (JSON Schema)
# =============================================================================

OUTPUT_SCHEMA = {
    "testCases": [
        {
            "id": "string (e.g. TC_001)",
            "title": "string",
            "description": "string",
            "module": "string (one of the selected modules)",
            "userType": "string",
            "priority": "low|medium|high|critical",
            "tags": ["string"],
            "preconditions": ["string"],
            "steps": [
                {
                    "stepNumber": "number (start at 1)",
                    "action": "string",
                    "expectedResult": "string",
                    "testData": "string (optional)"
                }
            ],
            "expectedResult": "string",
            "sourceStoryId": "string (id of the originating user story)"
        }
    ]
}


# =============================================================================
# PROMPT BUILDER
# =============================================================================

class PromptBuilder:
    """
    Builds prompts for remote test case generation.

    Architecture:
    - SYSTEM prompt: stable role + output contract
    - USER prompt: structured sections with request-specific data
    """

    def __init__(self, context: GenerationContext):
        self.ctx = context

    def build_system_prompt(self) -> str:
        """Role and output contract shared by every request."""
        return f'''You are an expert airline software test case generator specializing in booking systems.
Generate comprehensive, realistic test cases following airline industry standards.

## OUTPUT CONTRACT
Return ONLY valid JSON matching this schema:
{json.dumps(OUTPUT_SCHEMA, indent=2)}

No markdown. No commentary.'''

    def build_user_prompt(self) -> str:
        """
        Build the structured user prompt.

        Sections:
        1. AIRLINE DOMAIN CONTEXT
        2. USER TYPE
        3. MODULES
        4. TESTING SCOPE
        5. USER STORIES
        6. REQUIREMENTS
        7. OUTPUT FORMAT
        """
        sections = [
            self._build_domain_section(),
            self._build_user_type_section(),
            self._build_modules_section(),
            self._build_scope_section(),
            self._build_stories_section(),
            self._build_requirements_section(),
            self._build_output_section(),
        ]
        return '\n\n'.join(sections)

    def _build_domain_section(self) -> str:
        return f'''AIRLINE DOMAIN CONTEXT:
AIRLINE BUSINESS RULES:
{self._format_list(BUSINESS_RULES)}'''

    def _build_user_type_section(self) -> str:
        return f'''USER TYPE: {self.ctx.user_type}
{describe_user_type(self.ctx.user_type)}'''

    def _build_modules_section(self) -> str:
        modules = self.ctx.selected_modules
        lines = [f"{module}: {describe_module(module)}" for module in modules]
        return f"MODULES: {', '.join(modules)}\n" + '\n'.join(lines)

    def _build_scope_section(self) -> str:
        return f'''TESTING SCOPE: {self.ctx.testing_scope.value}
- Include Negative Tests: {_flag(self.ctx.include_negative_tests)}
- Include Performance Tests: {_flag(self.ctx.include_performance_tests)}
- Include Security Tests: {_flag(self.ctx.include_security_tests)}
OPTIONS: {json.dumps(self.ctx.options(), sort_keys=True)}'''

    def _build_stories_section(self) -> str:
        stories = '\n'.join(self._format_story(story) for story in self.ctx.user_stories)
        return f"USER STORIES TO CONVERT:\n{stories}"

    @staticmethod
    def _format_story(story: StoryRecord) -> str:
        return f'''ID: {story.story_id}
Description: {story.description}
As a: {story.actor_role}
I want: {story.desired_action}
So that: {story.benefit}
Given: {story.given}
When: {story.when}
Then: {story.then}
Acceptance Criteria: {story.acceptance_criteria}
Requirements: {story.requirements}
Notes: {story.notes}
AC ID: {story.acceptance_criteria_id}
Tags: {', '.join(story.tags)}
Priority: {story.priority.value}
---'''

    def _build_requirements_section(self) -> str:
        numbered = '\n'.join(f"{i}. {req}" for i, req in enumerate(GENERATION_REQUIREMENTS, start=1))
        return f"REQUIREMENTS:\n{numbered}"

    def _build_output_section(self) -> str:
        return f'''OUTPUT FORMAT:
Return a JSON object with a "testCases" array. Each entry must have this exact structure:
{json.dumps(OUTPUT_SCHEMA, indent=2)}
Use "{self.ctx.user_type}" as userType and the originating story id as sourceStoryId.'''

    @staticmethod
    def _format_list(items: List[str], prefix: str = "- ") -> str:
        """Format list items with prefix."""
        if not items:
            return f"{prefix}(none)"
        return '\n'.join(f"{prefix}{item}" for item in items)


def _flag(value: bool) -> str:
    return 'true' if value else 'false'


def build_prompts(context: GenerationContext) -> Tuple[str, str]:
    """Return (system_prompt, user_prompt) for a context."""
    builder = PromptBuilder(context)
    return builder.build_system_prompt(), builder.build_user_prompt()


def build_prompt(context: GenerationContext) -> str:
    """Single instruction payload for backends without a system role."""
    system_prompt, user_prompt = build_prompts(context)
    return f"{system_prompt}\n\n{user_prompt}"
