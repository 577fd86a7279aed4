"""
Use case: Generate test cases for selected user stories.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from core.domain.story import StoryRecord
from core.domain.test_case import GenerationContext, GenerationResult, TestingScope
from core.services.provider_registry import ProviderRegistry


@dataclass
class GenerationRequest:
    """Caller's selection of stories, modules and options."""
    stories: Sequence[StoryRecord]
    selected_story_ids: List[str]
    selected_modules: List[str]
    user_type: str = "airline_user"
    testing_scope: TestingScope = TestingScope.FULL
    include_negative_tests: bool = True
    include_performance_tests: bool = False
    include_security_tests: bool = False
    provider_name: Optional[str] = None

    def __post_init__(self):
        self.testing_scope = TestingScope(self.testing_scope)


class GenerateTestCasesUseCase:
    """Use case for generating test cases from parsed user stories."""

    def __init__(self, registry: ProviderRegistry):
        """Initialize use case with dependencies.

        Args:
            registry: Providers available for generation
        """
        self.registry = registry

    def build_context(self, request: GenerationRequest) -> GenerationContext:
        """Select the requested stories and assemble the generation context.

        Raises:
            ValueError: If no modules or stories are selected, or no story
                matches the selected IDs
        """
        if not request.selected_modules:
            raise ValueError("At least one module must be selected")
        if not request.selected_story_ids:
            raise ValueError("At least one user story must be selected")

        wanted = set(request.selected_story_ids)
        # Sheet order is kept; duplicate IDs stay duplicated
        selected = [story for story in request.stories if story.story_id in wanted]
        if not selected:
            raise ValueError("No matching user stories found")

        return GenerationContext(
            user_stories=selected,
            selected_modules=request.selected_modules,
            user_type=request.user_type,
            testing_scope=request.testing_scope,
            include_negative_tests=request.include_negative_tests,
            include_performance_tests=request.include_performance_tests,
            include_security_tests=request.include_security_tests,
        )

    async def execute(self, request: GenerationRequest) -> GenerationResult:
        """Execute test case generation.

        Args:
            request: Stories plus selection and options

        Returns:
            GenerationResult from the chosen provider

        Raises:
            ValueError: For an invalid selection
            ProviderNotFoundError: If the provider name is unknown
            ProviderMisconfiguredError: If the provider is not usable
        """
        context = self.build_context(request)
        return await self.registry.generate(context, request.provider_name)
