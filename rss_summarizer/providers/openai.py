"""
OpenAI provider implementation.
"""

from openai import AsyncOpenAI

from ..exceptions import SummarizationError
from .base import LLMProvider, LLMResponse, ModelTier


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider."""

    TIER_MODELS = {
        ModelTier.FAST: "gpt-4.1-nano",
        ModelTier.STANDARD: "gpt-4o-mini",
    }

    # Model aliases for convenience
    MODEL_ALIASES = {
        "fast": "gpt-4.1-nano",
        "standard": "gpt-4o-mini",
        "nano": "gpt-4.1-nano",
        "mini": "gpt-4o-mini",
    }

    def __init__(
        self,
        api_key: str,
        default_model: str | None = None,
        organization: str | None = None,
        timeout: float = 60,
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            default_model: Model to use for every tier (tier defaults when None)
            organization: Optional organization ID
            timeout: Request timeout in seconds
        """
        self.client = AsyncOpenAI(
            api_key=api_key,
            organization=organization,
            timeout=timeout,
            max_retries=0,
        )
        if default_model:
            self.model_override = self._resolve_model(default_model)
        self._default_model = self.get_model_for_tier(ModelTier.STANDARD)

    def _resolve_model(self, model: str) -> str:
        """Resolve model alias to full model ID."""
        return self.MODEL_ALIASES.get(model, model)

    @property
    def name(self) -> str:
        return "openai"

    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 200,
        temperature: float = 0.0,
    ) -> LLMResponse:
        resolved_model = self._resolve_model(model) if model else self._default_model

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        response = await self.client.chat.completions.create(
            model=resolved_model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )

        if not response.choices:
            raise SummarizationError("OpenAI returned no choices")

        choice = response.choices[0]
        usage = response.usage

        return LLMResponse(
            text=choice.message.content or "",
            model=resolved_model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            metadata={
                "finish_reason": choice.finish_reason,
                "provider": "openai",
            }
        )
