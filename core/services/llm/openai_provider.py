"""
OpenAI Provider
Test case generation using the OpenAI API (GPT-4o-mini, GPT-4o, etc.)
"""
import os
from typing import Optional

from openai import AsyncOpenAI

from core.interfaces.test_case_provider import LLMResponse
from core.services.llm.remote import RemoteProvider
from core.services.metrics.logger import StructuredLogger

logger = StructuredLogger("providers.openai")


class OpenAIProvider(RemoteProvider):
    """Remote provider backed by OpenAI chat completions in JSON mode."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        timeout: int = 60,
        max_retries: int = 2,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        client: Optional[AsyncOpenAI] = None
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            model: Model name to use (gpt-4o-mini, gpt-4o, etc.)
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries on failure
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            client: Pre-built async client, mainly for tests
        """
        super().__init__(model, timeout, max_retries, temperature, max_tokens)
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self._client = client

    @property
    def name(self) -> str:
        return "openai"

    @property
    def display_name(self) -> str:
        return "OpenAI GPT"

    @property
    def client(self) -> Optional[AsyncOpenAI]:
        """Lazy initialization of OpenAI client."""
        if self._client is None and self.api_key:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=self.max_retries
            )
        return self._client

    async def validate_configuration(self) -> bool:
        """Key present and the models endpoint answers."""
        if self.client is None:
            return False
        try:
            await self.client.models.list()
            return True
        except Exception as e:
            logger.warning("provider_validation_failed", provider=self.name, error=str(e))
            return False

    async def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        if self.client is None:
            raise RuntimeError("OpenAI client not initialized. Check OPENAI_API_KEY.")

        response = await self.client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            response_format={"type": "json_object"}
        )

        content = response.choices[0].message.content
        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens
            }
        return LLMResponse(
            content=content.strip() if content else "",
            model=response.model or self._model,
            usage=usage,
            finish_reason=response.choices[0].finish_reason
        )
