"""Adapter for the Hugging Face text-generation Inference API.

Unlike the chat endpoints, this API takes a single prompt string, so the
conversation is rendered with the Llama 3 chat template: the system prompt
plus the most recent user message.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from astraventa.core.error_types import ErrorType
from astraventa.core.provider.base import ChatProvider, ProviderError
from astraventa.models.chat import ChatMessage

END_OF_TURN = "<|eot_id|>"


def render_llama3_prompt(system_prompt: str, user_message: str) -> str:
    return (
        "<|begin_of_text|>"
        f"<|start_header_id|>system<|end_header_id|>\n\n{system_prompt}{END_OF_TURN}"
        f"<|start_header_id|>user<|end_header_id|>\n\n{user_message}{END_OF_TURN}"
        "<|start_header_id|>assistant<|end_header_id|>\n\n"
    )


class HuggingFaceInferenceProvider(ChatProvider):
    def build_payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        system_prompt = next((m.content for m in messages if m.role == "system"), "")
        user_message = next((m.content for m in reversed(messages) if m.role == "user"), "")
        if not user_message:
            raise ProviderError(self.name, ErrorType.BAD_REQUEST, "no user message to answer")

        return {
            "inputs": render_llama3_prompt(system_prompt, user_message),
            "parameters": {
                "max_new_tokens": self.max_tokens,
                "temperature": self.temperature,
                "return_full_text": False,
            },
        }

    def extract_text(self, data: Any) -> str:
        first = data[0] if isinstance(data, list) else data
        generated = first["generated_text"]
        if not isinstance(generated, str):
            raise TypeError(f"generated_text is {type(generated).__name__}, expected str")
        return generated.split(END_OF_TURN)[0].strip()
