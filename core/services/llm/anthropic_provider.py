"""
Anthropic Provider
Test case generation using the Anthropic Claude API (Claude 3.5 Sonnet, Claude 3 Haiku, etc.)
"""
import os
from typing import Optional

import anthropic

from core.interfaces.test_case_provider import LLMResponse
from core.services.llm.remote import RemoteProvider

JSON_ONLY_INSTRUCTION = (
    "IMPORTANT: Respond with valid JSON only. "
    "Do not include any text before or after the JSON."
)


class AnthropicProvider(RemoteProvider):
    """Remote provider backed by the Anthropic messages API."""

    # Model aliases for convenience
    MODELS = {
        "claude-3-5-sonnet": "claude-3-5-sonnet-20241022",
        "claude-3-sonnet": "claude-3-5-sonnet-20241022",
        "claude-3-haiku": "claude-3-haiku-20240307",
        "claude-3-opus": "claude-3-opus-20240229",
        "sonnet": "claude-3-5-sonnet-20241022",
        "haiku": "claude-3-haiku-20240307",
        "opus": "claude-3-opus-20240229",
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-3-5-sonnet",
        timeout: int = 60,
        max_retries: int = 2,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        client: Optional["anthropic.AsyncAnthropic"] = None
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            model: Model name or alias (claude-3-5-sonnet, claude-3-haiku, etc.)
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries on failure
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            client: Pre-built async client, mainly for tests
        """
        super().__init__(self.MODELS.get(model, model), timeout, max_retries, temperature, max_tokens)
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self._client = client

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def display_name(self) -> str:
        return "Anthropic Claude"

    @property
    def client(self) -> Optional["anthropic.AsyncAnthropic"]:
        """Lazy initialization of Anthropic client."""
        if self._client is None and self._api_key:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self.timeout,
                max_retries=self.max_retries
            )
        return self._client

    async def validate_configuration(self) -> bool:
        """The messages API has no free probe; a key or injected client is enough."""
        return bool(self._client or self._api_key)

    async def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        if self.client is None:
            raise RuntimeError("Anthropic client not initialized. Check ANTHROPIC_API_KEY.")

        response = await self.client.messages.create(
            model=self._model,
            max_tokens=self.max_tokens,
            system=f"{system_prompt}\n\n{JSON_ONLY_INSTRUCTION}",
            messages=[{"role": "user", "content": user_prompt}],
            temperature=self.temperature
        )

        # Content may be split across several blocks
        content = ""
        for block in response.content:
            if hasattr(block, "text"):
                content += block.text

        usage = {
            "input_tokens": response.usage.input_tokens,
            "output_tokens": response.usage.output_tokens,
            "total_tokens": response.usage.input_tokens + response.usage.output_tokens
        }
        return LLMResponse(
            content=content.strip(),
            model=self._model,
            usage=usage,
            finish_reason=response.stop_reason
        )
