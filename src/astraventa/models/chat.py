"""Chat data model shared by the router, the adapters and the HTTP boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """One message in a conversation; order within a conversation is significant."""

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True, slots=True)
class ProviderResult:
    """Text produced by a single successful provider call."""

    content: str
    model_identifier: str
    latency_ms: Optional[int] = None


@dataclass(frozen=True, slots=True)
class RouteSuccess:
    """The first provider in priority order that produced usable content."""

    content: str
    model_identifier: str
    latency_ms: Optional[int] = None

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "ok": True,
            "content": self.content,
            "modelIdentifier": self.model_identifier,
        }
        if self.latency_ms is not None:
            payload["latencyMs"] = self.latency_ms
        return payload


@dataclass(frozen=True, slots=True)
class AllProvidersFailed:
    """Every provider was skipped or failed; carries the safe canned reply."""

    fallback_content: str
    error: str

    def to_payload(self) -> dict[str, object]:
        return {"ok": False, "error": self.error, "fallback": self.fallback_content}


RouterOutcome = Union[RouteSuccess, AllProvidersFailed]
