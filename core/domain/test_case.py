"""
Test case generation domain entities.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from core.domain.story import Priority, StoryRecord


class TestingScope(str, Enum):
    """How broad the requested test suite should be."""
    SMOKE = "smoke"
    REGRESSION = "regression"
    FULL = "full"
    CUSTOM = "custom"


@dataclass(frozen=True)
class GenerationContext:
    """Selected stories plus the options handed to a provider."""
    user_stories: List[StoryRecord]
    selected_modules: List[str]
    user_type: str
    testing_scope: TestingScope = TestingScope.FULL
    include_negative_tests: bool = True
    include_performance_tests: bool = False
    include_security_tests: bool = False

    def __post_init__(self):
        object.__setattr__(self, "user_stories", list(self.user_stories))
        object.__setattr__(self, "selected_modules", list(self.selected_modules))
        object.__setattr__(self, "testing_scope", TestingScope(self.testing_scope))

    def options(self) -> Dict[str, Any]:
        """Generation options without the story payload."""
        return {
            "selectedModules": list(self.selected_modules),
            "userType": self.user_type,
            "testingScope": self.testing_scope.value,
            "includeNegativeTests": self.include_negative_tests,
            "includePerformanceTests": self.include_performance_tests,
            "includeSecurityTests": self.include_security_tests,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = {"userStories": [story.to_dict() for story in self.user_stories]}
        data.update(self.options())
        return data


@dataclass(frozen=True)
class TestStep:
    """Represents a single test step."""
    step_number: int
    action: str
    expected_result: str
    test_data: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "stepNumber": self.step_number,
            "action": self.action,
            "expectedResult": self.expected_result,
        }
        if self.test_data is not None:
            data["testData"] = self.test_data
        return data


@dataclass(frozen=True)
class TestArtifact:
    """One generated test case."""
    id: str
    title: str
    description: str
    module: str
    user_type: str
    priority: Priority
    tags: List[str]
    steps: List[TestStep]
    expected_result: str
    preconditions: List[str] = field(default_factory=list)
    source_story_id: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Test case ID cannot be empty")
        object.__setattr__(self, "priority", Priority.parse(self.priority))
        object.__setattr__(self, "tags", list(self.tags))
        object.__setattr__(self, "steps", list(self.steps))
        object.__setattr__(self, "preconditions", list(self.preconditions))

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "module": self.module,
            "userType": self.user_type,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "steps": [step.to_dict() for step in self.steps],
            "expectedResult": self.expected_result,
            "preconditions": list(self.preconditions),
        }
        if self.source_story_id is not None:
            data["sourceStoryId"] = self.source_story_id
        return data


@dataclass(frozen=True)
class GenerationSummary:
    """Aggregates over the generated test cases."""
    total_generated: int
    by_module: Dict[str, int]
    by_priority: Dict[str, int]
    generation_time_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalGenerated": self.total_generated,
            "byModule": dict(self.by_module),
            "byPriority": dict(self.by_priority),
            "generationTime": round(self.generation_time_ms, 2),
        }


def summarize(test_cases: Sequence[TestArtifact], elapsed_ms: float) -> GenerationSummary:
    """Count test cases by module and priority."""
    by_module = Counter(tc.module for tc in test_cases)
    by_priority = Counter(tc.priority.value for tc in test_cases)
    return GenerationSummary(
        total_generated=len(test_cases),
        by_module=dict(by_module),
        by_priority=dict(by_priority),
        generation_time_ms=elapsed_ms,
    )


@dataclass(frozen=True)
class GenerationMetadata:
    """Who generated the result and for which request."""
    provider: str
    model: str
    timestamp: str
    context: GenerationContext
    tokens_used: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "provider": self.provider,
            "model": self.model,
            "timestamp": self.timestamp,
            "context": self.context.to_dict(),
        }
        if self.tokens_used is not None:
            data["tokensUsed"] = self.tokens_used
        return data


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation call. Callers must inspect ``success``."""
    success: bool
    test_cases: List[TestArtifact]
    summary: GenerationSummary
    errors: List[str]
    metadata: GenerationMetadata

    @classmethod
    def succeeded(
        cls,
        test_cases: Sequence[TestArtifact],
        elapsed_ms: float,
        provider: str,
        model: str,
        context: GenerationContext,
        warnings: Optional[Sequence[str]] = None,
        tokens_used: Optional[int] = None
    ) -> "GenerationResult":
        return cls(
            success=True,
            test_cases=list(test_cases),
            summary=summarize(test_cases, elapsed_ms),
            errors=list(warnings or []),
            metadata=_metadata(provider, model, context, tokens_used),
        )

    @classmethod
    def failed(
        cls,
        errors: Sequence[str],
        elapsed_ms: float,
        provider: str,
        model: str,
        context: GenerationContext
    ) -> "GenerationResult":
        return cls(
            success=False,
            test_cases=[],
            summary=summarize([], elapsed_ms),
            errors=list(errors),
            metadata=_metadata(provider, model, context, None),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "testCases": [tc.to_dict() for tc in self.test_cases],
            "summary": self.summary.to_dict(),
            "errors": list(self.errors),
            "metadata": self.metadata.to_dict(),
        }


def _metadata(
    provider: str,
    model: str,
    context: GenerationContext,
    tokens_used: Optional[int]
) -> GenerationMetadata:
    return GenerationMetadata(
        provider=provider,
        model=model,
        timestamp=datetime.now(timezone.utc).isoformat(),
        context=context,
        tokens_used=tokens_used,
    )
