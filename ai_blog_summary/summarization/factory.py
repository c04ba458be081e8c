"""
Provider registry and orchestrator construction from settings.
"""

import logging
from typing import Dict, Optional, Type

from ..config.settings import PluginSettings
from ..exceptions import ConfigurationError
from .completion_client import CompletionClient
from .engine import GenerationOrchestrator
from .provider import SummaryProvider

logger = logging.getLogger(__name__)

PROVIDERS: Dict[str, Type[SummaryProvider]] = {
    "openai": CompletionClient,
}


def register_provider(name: str, provider_class: Type[SummaryProvider]) -> None:
    """Make an additional provider selectable by name."""
    PROVIDERS[name.lower()] = provider_class


def create_provider(name: str, **kwargs) -> SummaryProvider:
    """Instantiate the provider registered under ``name``.

    Raises:
        ConfigurationError: If no provider has that name
    """
    provider_class = PROVIDERS.get((name or "").lower())
    if provider_class is None:
        raise ConfigurationError(
            f"Unknown provider '{name}'",
            context={"available_providers": sorted(PROVIDERS)},
        )
    return provider_class(**kwargs)


def create_orchestrator(settings: PluginSettings,
                        provider: Optional[SummaryProvider] = None) -> GenerationOrchestrator:
    """Build a GenerationOrchestrator from plugin settings."""
    provider = provider or create_provider(settings.provider)
    if settings.api_key and not provider.validate_api_key(settings.api_key):
        logger.warning(f"API key does not look like a valid {provider.name} key")

    return GenerationOrchestrator(
        api_key=settings.api_key,
        model=settings.model,
        timeout_seconds=settings.timeout,
        provider=provider,
    )
