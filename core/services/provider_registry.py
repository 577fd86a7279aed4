"""
Provider Registry

Named table of test case providers built once at startup. Lookups and
generation calls never mutate it, so it can be shared freely.
"""
import time
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from core.domain.errors import ProviderMisconfiguredError, ProviderNotFoundError
from core.domain.test_case import GenerationContext, GenerationResult
from core.interfaces.test_case_provider import ITestCaseProvider
from core.services.llm.mock_provider import DeterministicProvider
from core.services.metrics.logger import StructuredLogger

logger = StructuredLogger("providers.registry")


class ProviderRegistry:
    """Read-only mapping of provider name to provider."""

    def __init__(
        self,
        providers: Sequence[ITestCaseProvider],
        default_name: Optional[str] = None
    ):
        """
        Args:
            providers: Providers in registration order; a later provider
                with the same name replaces an earlier one
            default_name: Provider used when a call names none; the first
                registered provider when omitted

        Raises:
            ValueError: If default_name is not among the providers
        """
        table: Dict[str, ITestCaseProvider] = {}
        for provider in providers:
            table[provider.name] = provider
        if DeterministicProvider().name not in table:
            fallback = DeterministicProvider()
            table[fallback.name] = fallback

        if default_name is None:
            default_name = next(iter(table))
        if default_name not in table:
            raise ValueError(f"Default provider '{default_name}' is not registered")

        self._providers = MappingProxyType(table)
        self._default_name = default_name

    @property
    def providers(self) -> Mapping[str, ITestCaseProvider]:
        """Read-only view of the provider table."""
        return self._providers

    @property
    def default_provider(self) -> str:
        return self._default_name

    def registered_providers(self) -> List[str]:
        """Registered provider names in registration order."""
        return list(self._providers)

    async def available_providers(self) -> List[str]:
        """Names of providers whose configuration check passes, in registration order."""
        status = await self.check_providers()
        return [name for name, configured in status.items() if configured]

    def get(self, name: str) -> Optional[ITestCaseProvider]:
        return self._providers.get(name)

    async def check_providers(self) -> Dict[str, bool]:
        """Run each provider's configuration check, one at a time."""
        status: Dict[str, bool] = {}
        for name, provider in self._providers.items():
            status[name] = await provider.validate_configuration()
        return status

    async def generate(
        self,
        context: GenerationContext,
        provider_name: Optional[str] = None
    ) -> GenerationResult:
        """
        Generate test cases with a named provider.

        Args:
            context: Stories, modules and options
            provider_name: Registered name; the default provider when None

        Returns:
            The provider's GenerationResult (which may report failure)

        Raises:
            ProviderNotFoundError: If no provider has that name
            ProviderMisconfiguredError: If the provider's configuration check fails
        """
        name = self._default_name if provider_name is None else provider_name
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(f"Provider {name} not found", name)

        if not await provider.validate_configuration():
            raise ProviderMisconfiguredError(f"Provider {name} configuration is invalid", name)

        start = time.perf_counter()
        result = await provider.generate_test_cases(context)
        logger.log_generation(
            provider=name,
            model=provider.model,
            duration_ms=(time.perf_counter() - start) * 1000,
            num_test_cases=len(result.test_cases),
            num_stories=len(context.user_stories),
            success=result.success,
            error=result.errors[0] if not result.success and result.errors else None,
        )
        return result
