"""Inbound request bodies for the relay endpoints.

Bodies are parsed from raw JSON rather than through FastAPI's automatic
validation so that malformed input maps to the relay's 400 contract instead
of FastAPI's default 422 response.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from astraventa.models.chat import ChatMessage


class InvalidRequestError(Exception):
    """Inbound body rejected before it reaches any service."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InboundMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    role: Literal["user", "assistant"]
    content: str

    def to_chat_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class ChatRequest(BaseModel):
    """Body of ``POST /chat-ai``."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    messages: list[InboundMessage] = Field(min_length=1)
    conversation_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("conversationIdentifier", "conversation_id"),
    )

    def history(self) -> list[ChatMessage]:
        return [message.to_chat_message() for message in self.messages]

    @property
    def last_user_message(self) -> str | None:
        return next((m.content for m in reversed(self.messages) if m.role == "user"), None)


class ContactRequest(BaseModel):
    """Body of ``POST /send-contact-email``."""

    model_config = ConfigDict(extra="ignore", frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    message: str = Field(min_length=1)


def _describe(error: ValidationError) -> str:
    """Name the part of the body that failed, e.g. ``Invalid messages (messages.0.role: ...)``."""
    details = error.errors()
    if not details:
        return f"Invalid request ({error})"
    first = details[0]
    loc = first.get("loc", ())
    location = ".".join(str(part) for part in loc)
    subject = "messages" if loc and loc[0] == "messages" else "request"
    return f"Invalid {subject} ({location}: {first.get('msg', 'invalid value')})"


def parse_chat_request(body: Any) -> ChatRequest:
    """Validate a decoded JSON body.

    Raises:
        InvalidRequestError: body is not an object, ``messages`` is missing or
            empty, a message has an unknown role or non-text content, or the
            conversation identifier is not text.
    """
    if not isinstance(body, dict):
        raise InvalidRequestError("messages array required")
    messages = body.get("messages")
    if not isinstance(messages, list) or not messages:
        raise InvalidRequestError("messages array required")
    try:
        return ChatRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError(_describe(e)) from e


def parse_contact_request(body: Any) -> ContactRequest:
    """Validate a decoded JSON body.

    Raises:
        InvalidRequestError: any of ``name``, ``email`` or ``message`` is
            missing, blank or not text.
    """
    if not isinstance(body, dict):
        raise InvalidRequestError("Missing fields")
    try:
        return ContactRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError("Missing fields") from e
