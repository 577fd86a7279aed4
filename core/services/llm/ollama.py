"""
Ollama Provider
Test case generation against a local Ollama server.
"""
import asyncio
from typing import Optional

import requests

from core.interfaces.test_case_provider import LLMResponse
from core.services.llm.remote import RemoteProvider
from core.services.metrics.logger import StructuredLogger

logger = StructuredLogger("providers.ollama")


class OllamaProvider(RemoteProvider):
    """Local LLM provider using Ollama's HTTP API."""

    def __init__(
        self,
        endpoint: str = "http://localhost:11434",
        model: str = "llama3.2:3b",
        timeout: int = 60,
        max_retries: int = 2,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        session: Optional[requests.Session] = None
    ):
        """Initialize Ollama provider.

        Args:
            endpoint: Ollama API endpoint
            model: Model name to use
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries on failure
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            session: Optional HTTP session; one-off requests are made when omitted
        """
        super().__init__(model, timeout, max_retries, temperature, max_tokens)
        self.endpoint = endpoint.rstrip('/')
        self.session = session

    @property
    def _http(self):
        """Injected session, or the requests module for one-off calls."""
        return self.session if self.session is not None else requests

    @property
    def name(self) -> str:
        return "ollama"

    @property
    def display_name(self) -> str:
        return "Ollama (local)"

    async def validate_configuration(self) -> bool:
        return await asyncio.to_thread(self.is_available)

    def is_available(self) -> bool:
        """Check if Ollama is running and the model is pulled.

        Returns:
            True if Ollama is running and model is available
        """
        try:
            response = self._http.get(f"{self.endpoint}/api/tags", timeout=5)
            if response.status_code != 200:
                return False

            models = response.json().get('models', [])
            model_names = [m.get('name', '') for m in models]

            # Tag variations (llama3.2 vs llama3.2:3b) count as the same model
            model_base = self._model.split(':')[0]
            if any(name.startswith(model_base) for name in model_names):
                return True

            logger.warning(
                "ollama_model_missing",
                model=self._model,
                available_models=model_names,
            )
            return False

        except requests.exceptions.RequestException as e:
            logger.warning("provider_validation_failed", provider=self.name, error=str(e))
            return False

    async def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        return await asyncio.to_thread(self._post_generate, system_prompt, user_prompt)

    def _post_generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        payload = {
            "model": self._model,
            "system": system_prompt,
            "prompt": user_prompt,
            "stream": False,
            "format": "json",
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            }
        }

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries + 1):
            try:
                response = self._http.post(
                    f"{self.endpoint}/api/generate",
                    json=payload,
                    timeout=self.timeout
                )
                response.raise_for_status()
                result = response.json()
                prompt_tokens = result.get('prompt_eval_count', 0)
                completion_tokens = result.get('eval_count', 0)
                return LLMResponse(
                    content=result.get('response', '').strip(),
                    model=result.get('model', self._model),
                    usage={
                        "prompt_tokens": prompt_tokens,
                        "completion_tokens": completion_tokens,
                        "total_tokens": prompt_tokens + completion_tokens
                    },
                    finish_reason=result.get('done_reason')
                )
            except requests.exceptions.ConnectionError:
                raise RuntimeError(f"Could not connect to Ollama at {self.endpoint}")
            except requests.exceptions.RequestException as e:
                last_error = e
                logger.warning(
                    "ollama_request_failed",
                    attempt=attempt + 1,
                    max_attempts=self.max_retries + 1,
                    error=str(e),
                )

        raise RuntimeError(f"Ollama request failed: {last_error}")
