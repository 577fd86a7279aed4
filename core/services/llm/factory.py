"""
Provider Factory
Creates test case providers and the startup registry from configuration.
"""
from typing import List, Optional

from core.config.environment import EnvironmentConfig
from core.interfaces.test_case_provider import ITestCaseProvider, ProviderType
from core.services.llm.anthropic_provider import AnthropicProvider
from core.services.llm.gemini_provider import GeminiProvider
from core.services.llm.mock_provider import DeterministicProvider
from core.services.llm.ollama import OllamaProvider
from core.services.llm.openai_provider import OpenAIProvider
from core.services.metrics.logger import StructuredLogger
from core.services.provider_registry import ProviderRegistry

logger = StructuredLogger("providers.factory")

# Aliases accepted on the command line and in DEFAULT_PROVIDER
PROVIDER_ALIASES = {
    "claude": ProviderType.ANTHROPIC.value,
    "google": ProviderType.GEMINI.value,
    "gpt": ProviderType.OPENAI.value,
}


def create_provider(
    provider_type: str,
    config: Optional[EnvironmentConfig] = None
) -> Optional[ITestCaseProvider]:
    """Create a single provider.

    Args:
        provider_type: 'mock', 'openai', 'gemini', 'anthropic' or 'ollama'
        config: Credentials and shared LLM settings

    Returns:
        Provider instance or None if the type is unsupported
    """
    config = config or EnvironmentConfig()
    provider = provider_type.lower()
    provider = PROVIDER_ALIASES.get(provider, provider)
    shared = dict(
        timeout=config.llm_timeout,
        max_retries=config.llm_max_retries,
        temperature=config.llm_temperature,
        max_tokens=config.llm_max_tokens,
    )

    if provider == ProviderType.MOCK.value:
        return DeterministicProvider()
    elif provider == ProviderType.OPENAI.value:
        return OpenAIProvider(api_key=config.openai_api_key, model=config.openai_model, **shared)
    elif provider == ProviderType.GEMINI.value:
        return GeminiProvider(api_key=config.gemini_api_key, model=config.gemini_model, **shared)
    elif provider == ProviderType.ANTHROPIC.value:
        return AnthropicProvider(api_key=config.anthropic_api_key, model=config.anthropic_model, **shared)
    elif provider == ProviderType.OLLAMA.value:
        return OllamaProvider(endpoint=config.ollama_endpoint, model=config.ollama_model, **shared)

    logger.warning(
        "unsupported_provider",
        provider=provider_type,
        supported=[p.value for p in ProviderType],
    )
    return None


def create_provider_registry(config: Optional[EnvironmentConfig] = None) -> ProviderRegistry:
    """Build the startup registry.

    Remote providers are registered in the order openai, gemini, anthropic,
    ollama when credentials (or, for ollama, enablement) are present. The
    deterministic provider is always registered last.

    The default is ``config.default_provider`` when it names a registered
    provider, else the first remote provider, else ``mock``.
    """
    config = config or EnvironmentConfig.from_env()
    candidates = [
        (ProviderType.OPENAI, bool(config.openai_api_key)),
        (ProviderType.GEMINI, bool(config.gemini_api_key)),
        (ProviderType.ANTHROPIC, bool(config.anthropic_api_key)),
        (ProviderType.OLLAMA, config.ollama_enabled),
    ]

    providers: List[ITestCaseProvider] = []
    for provider_type, enabled in candidates:
        if enabled:
            providers.append(create_provider(provider_type.value, config))
    providers.append(DeterministicProvider())

    names = [p.name for p in providers]
    requested = PROVIDER_ALIASES.get(config.default_provider or "", config.default_provider)
    if requested in names:
        default_name = requested
    else:
        if requested:
            logger.warning("default_provider_unavailable", requested=requested, registered=names)
        default_name = names[0]

    logger.info("provider_registry_built", providers=names, default_provider=default_name)
    return ProviderRegistry(providers, default_name=default_name)
