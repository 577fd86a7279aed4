"""
Gemini Provider
Test case generation using the Google Gemini API (gemini-2.0-flash, etc.)
"""
import os
from typing import Optional

from google import genai

from core.interfaces.test_case_provider import LLMResponse
from core.services.llm.remote import RemoteProvider
from core.services.metrics.logger import StructuredLogger

logger = StructuredLogger("providers.gemini")


class GeminiProvider(RemoteProvider):
    """Remote provider backed by google-genai in native JSON mode."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.0-flash",
        timeout: int = 60,
        max_retries: int = 2,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        client: Optional["genai.Client"] = None
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key (defaults to GEMINI_API_KEY env var)
            model: Model name (gemini-2.0-flash, gemini-2.0-flash-lite, etc.)
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries on failure
            temperature: Sampling temperature
            max_tokens: Maximum output tokens
            client: Pre-built client, mainly for tests
        """
        super().__init__(model, timeout, max_retries, temperature, max_tokens)
        self._api_key = api_key or os.getenv("GEMINI_API_KEY")
        self._client = client

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def display_name(self) -> str:
        return "Google Gemini"

    @property
    def client(self) -> Optional["genai.Client"]:
        """Lazy initialization of Gemini client."""
        if self._client is None and self._api_key:
            self._client = genai.Client(
                api_key=self._api_key,
                http_options=genai.types.HttpOptions(timeout=self.timeout * 1000)
            )
        return self._client

    async def validate_configuration(self) -> bool:
        """Key present and the configured model can be looked up."""
        if self.client is None:
            return False
        try:
            await self.client.aio.models.get(model=self._model)
            return True
        except Exception as e:
            logger.warning("provider_validation_failed", provider=self.name, error=str(e))
            return False

    async def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        if self.client is None:
            raise RuntimeError("Gemini client not initialized. Check GEMINI_API_KEY.")

        config = genai.types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            response_mime_type="application/json",
        )
        response = await self.client.aio.models.generate_content(
            model=self._model,
            contents=user_prompt,
            config=config
        )

        content = response.text or ""
        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0
            }
        return LLMResponse(
            content=content.strip(),
            model=self._model,
            usage=usage,
            finish_reason="stop"
        )
