"""OpenAI-compatible provider implementation."""

from __future__ import annotations

from typing import Any, Dict, List

from openai import AsyncOpenAI

from .types import GenerationConfig, LLMResponse, Message


class OpenAICompatibleProvider:
    """Provider for OpenAI-compatible chat APIs (Groq, OpenAI, DeepSeek, ...).

    One ``generate`` call is one HTTP request: the SDK's own retries are off.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str = "",
    ) -> None:
        self.model = model
        self.api_base = api_base or ""
        self.client = AsyncOpenAI(api_key=api_key, base_url=api_base or None, max_retries=0)

    async def generate(
        self,
        messages: List[Message],
        config: GenerationConfig,
    ) -> LLMResponse:
        kwargs = self._build_chat_kwargs(self._to_openai_messages(messages, config.system_prompt), config)
        completion = await self.client.chat.completions.create(**kwargs)
        return self._from_openai_completion(completion)

    def _build_chat_kwargs(self, messages: List[Dict[str, Any]], config: GenerationConfig) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if config.max_tokens and config.max_tokens > 0:
            kwargs["max_tokens"] = config.max_tokens
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        if config.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        return kwargs

    def _to_openai_messages(self, messages: List[Message], system_prompt: str) -> List[Dict[str, Any]]:
        result: List[Dict[str, Any]] = []
        if system_prompt:
            result.append({"role": "system", "content": system_prompt})
        for msg in messages:
            role = "assistant" if msg.role == "assistant" else "user"
            result.append({"role": role, "content": msg.text})
        return result

    def _from_openai_completion(self, completion: Any) -> LLMResponse:
        choices = getattr(completion, "choices", None) or []
        text = ""
        if choices:
            text = getattr(choices[0].message, "content", None) or ""

        usage = None
        raw_usage = getattr(completion, "usage", None)
        if raw_usage is not None:
            usage = {
                "prompt_tokens": getattr(raw_usage, "prompt_tokens", 0) or 0,
                "completion_tokens": getattr(raw_usage, "completion_tokens", 0) or 0,
                "total_tokens": getattr(raw_usage, "total_tokens", 0) or 0,
            }
        return LLMResponse(text=text, usage=usage, raw=completion)
