"""
Shared generation flow for remote providers.

A remote adapter only knows how to send (system, user) prompts to its
backend. Prompt rendering, reply parsing, timing and failure isolation
live here so every backend behaves the same way.
"""
import time
from abc import abstractmethod
from typing import Awaitable, Callable

from core.domain.errors import ProviderCallError
from core.domain.test_case import GenerationContext, GenerationResult
from core.interfaces.test_case_provider import ITestCaseProvider, LLMResponse
from core.services.llm.prompt_builder import build_prompts
from core.services.llm.response_parser import parse_test_case_response
from core.services.metrics.logger import StructuredLogger

GENERATION_FAILED_PREFIX = "Generation failed"

logger = StructuredLogger("providers.remote")

CompleteFn = Callable[[str, str], Awaitable[LLMResponse]]


async def generate_via_backend(
    provider: ITestCaseProvider,
    context: GenerationContext,
    complete: CompleteFn
) -> GenerationResult:
    """
    Run one generation request against a backend.

    Args:
        provider: Provider reported in the result metadata
        context: Stories, modules and options
        complete: Coroutine sending (system_prompt, user_prompt) to the backend

    Returns:
        GenerationResult; any backend or parsing failure becomes a failed
        result carrying ``"Generation failed: <detail>"``
    """
    start = time.perf_counter()
    try:
        system_prompt, user_prompt = build_prompts(context)
        response = await complete(system_prompt, user_prompt)
        if response is None or not response.content:
            raise ProviderCallError("Empty response from backend", provider.name)
        test_cases, warnings = parse_test_case_response(response.content, context)
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(
            "provider_call_failed",
            provider=provider.name,
            model=provider.model,
            error=str(e),
            error_type=type(e).__name__,
        )
        return GenerationResult.failed(
            [f"{GENERATION_FAILED_PREFIX}: {e}"],
            elapsed_ms=elapsed_ms,
            provider=provider.display_name,
            model=provider.model,
            context=context,
        )

    elapsed_ms = (time.perf_counter() - start) * 1000
    for warning in warnings:
        logger.warning("test_case_skipped", provider=provider.name, detail=warning)
    return GenerationResult.succeeded(
        test_cases,
        elapsed_ms=elapsed_ms,
        provider=provider.display_name,
        model=response.model or provider.model,
        context=context,
        warnings=warnings,
        tokens_used=response.total_tokens,
    )


class RemoteProvider(ITestCaseProvider):
    """Base class for adapters that call a hosted or local LLM."""

    def __init__(
        self,
        model: str,
        timeout: int = 60,
        max_retries: int = 2,
        temperature: float = 0.7,
        max_tokens: int = 4000
    ):
        self._model = model
        self.timeout = timeout
        self.max_retries = max_retries
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def model(self) -> str:
        """Model being used."""
        return self._model

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Send the prompts to the backend and return its raw reply."""
        pass

    async def generate_test_cases(self, context: GenerationContext) -> GenerationResult:
        return await generate_via_backend(self, context, self.complete)
