"""
Base LLM provider interface.

Defines the abstract interface that all completion-service implementations
follow. Providers are natively async: every completion is a suspension point
on the request's event loop.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class ModelTier(Enum):
    """Model capability tiers for per-task selection."""
    FAST = "fast"          # Cheap models for short digest blocks and comment threads
    STANDARD = "standard"  # Longer articles


@dataclass
class LLMResponse:
    """Standardized response from any completion service."""
    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    metadata: dict = field(default_factory=dict)


class LLMProvider(ABC):
    """
    Abstract base class for completion services.

    Subclasses declare TIER_MODELS and implement complete(). The API key is
    handed to the provider at construction; providers never read the
    environment themselves.
    """

    TIER_MODELS: dict[ModelTier, str] = {}

    # Operator-configured model; when set it replaces every tier choice
    model_override: str | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name (e.g., 'openai', 'anthropic')."""
        pass

    def get_model_for_tier(self, tier: ModelTier) -> str:
        """Get the model ID this provider uses for a capability tier."""
        return self.model_override or self.TIER_MODELS[tier]

    @abstractmethod
    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 200,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """
        Generate a completion from the model.

        Args:
            user_prompt: The user message (content to summarize)
            system_prompt: Optional system prompt (task instructions)
            model: Specific model to use (defaults to provider's default)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature (0.0 = deterministic)

        Returns:
            LLMResponse with the generated text and metadata
        """
        pass
