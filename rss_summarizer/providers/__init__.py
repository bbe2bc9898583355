"""
LLM Provider abstraction layer.

Supports OpenAI and Anthropic completion services behind one async interface.
"""

from .base import LLMProvider, LLMResponse, ModelTier
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider
from .factory import create_provider, get_provider_from_env, ProviderType

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "ModelTier",
    "AnthropicProvider",
    "OpenAIProvider",
    "create_provider",
    "get_provider_from_env",
    "ProviderType",
]
