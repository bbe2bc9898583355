"""
Provider factory for creating completion-service providers.

Handles provider selection based on configuration and available API keys.
"""

from enum import Enum

from .base import LLMProvider
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider


class ProviderType(Enum):
    """Available completion-service providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


def create_provider(
    provider_type: ProviderType | str,
    api_key: str,
    default_model: str | None = None,
    timeout: float = 60,
) -> LLMProvider:
    """
    Create a provider instance.

    Args:
        provider_type: The provider to create (openai, anthropic)
        api_key: API key for the provider
        default_model: Optional model that replaces the tier defaults
        timeout: Completion request timeout in seconds

    Returns:
        Configured LLMProvider instance

    Raises:
        ValueError: If provider_type is unknown
    """
    if isinstance(provider_type, str):
        try:
            provider_type = ProviderType(provider_type.lower())
        except ValueError:
            raise ValueError(
                f"Unknown provider: {provider_type}. "
                f"Available: {[p.value for p in ProviderType]}"
            )

    if provider_type == ProviderType.OPENAI:
        return OpenAIProvider(
            api_key=api_key,
            default_model=default_model,
            timeout=timeout,
        )
    elif provider_type == ProviderType.ANTHROPIC:
        return AnthropicProvider(
            api_key=api_key,
            default_model=default_model,
            timeout=timeout,
        )
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")


def get_provider_from_env(
    openai_key: str | None = None,
    anthropic_key: str | None = None,
    preferred_provider: str | None = None,
    default_model: str | None = None,
    timeout: float = 60,
) -> LLMProvider | None:
    """
    Create a provider from the configured keys.

    The preferred provider wins when its key is set; otherwise the first
    configured key in the order OpenAI > Anthropic is used.

    Returns:
        Configured LLMProvider or None if no keys are available
    """
    providers = {
        ProviderType.OPENAI: openai_key,
        ProviderType.ANTHROPIC: anthropic_key,
    }

    if preferred_provider:
        try:
            pref_type = ProviderType(preferred_provider.lower())
        except ValueError:
            pref_type = None  # Unknown name, fall through to default order
        if pref_type and providers.get(pref_type):
            return create_provider(
                pref_type,
                providers[pref_type],
                default_model=default_model,
                timeout=timeout,
            )

    for provider_type, api_key in providers.items():
        if api_key:
            return create_provider(
                provider_type,
                api_key,
                default_model=default_model,
                timeout=timeout,
            )

    return None
