"""
Anthropic Claude provider implementation.
"""

import anthropic

from ..exceptions import SummarizationError
from .base import LLMProvider, LLMResponse, ModelTier


class AnthropicProvider(LLMProvider):
    """Anthropic Messages API provider."""

    TIER_MODELS = {
        ModelTier.FAST: "claude-haiku-4-5",
        ModelTier.STANDARD: "claude-sonnet-4-5",
    }

    MODEL_ALIASES = {
        "haiku": "claude-haiku-4-5",
        "sonnet": "claude-sonnet-4-5",
        "fast": "claude-haiku-4-5",
        "standard": "claude-sonnet-4-5",
    }

    def __init__(
        self,
        api_key: str,
        default_model: str | None = None,
        timeout: float = 60,
    ):
        self.client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)
        if default_model:
            self.model_override = self._resolve_model(default_model)
        self._default_model = self.get_model_for_tier(ModelTier.STANDARD)

    def _resolve_model(self, model: str) -> str:
        return self.MODEL_ALIASES.get(model, model)

    @property
    def name(self) -> str:
        return "anthropic"

    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 200,
        temperature: float = 0.0,
    ) -> LLMResponse:
        resolved_model = self._resolve_model(model) if model else self._default_model

        kwargs = {
            "model": resolved_model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if temperature > 0:
            kwargs["temperature"] = temperature
        if system_prompt:
            kwargs["system"] = system_prompt

        response = await self.client.messages.create(**kwargs)

        text_blocks = [block.text for block in response.content if block.type == "text"]
        if not text_blocks:
            raise SummarizationError("Anthropic returned no text content")

        usage = response.usage
        return LLMResponse(
            text="".join(text_blocks),
            model=resolved_model,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            metadata={
                "stop_reason": response.stop_reason,
                "provider": "anthropic",
            }
        )
