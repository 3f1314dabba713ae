"""Adapter for OpenAI-compatible chat completion endpoints (Groq, OpenRouter, HF router)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from astraventa.core.provider.base import ChatProvider
from astraventa.models.chat import ChatMessage


class OpenAICompatibleProvider(ChatProvider):
    def build_payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [message.to_dict() for message in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def extract_text(self, data: Any) -> str:
        message = data["choices"][0]["message"]
        content = message.get("content")
        if content is None:
            # Refusals and safety-filtered replies come back with null content
            return ""
        if not isinstance(content, str):
            raise TypeError(f"message content is {type(content).__name__}, expected str")
        return content
