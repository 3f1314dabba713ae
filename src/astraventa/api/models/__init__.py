from astraventa.api.models.endpoint_requests import (
    ChatRequest,
    ContactRequest,
    InboundMessage,
    InvalidRequestError,
    parse_chat_request,
    parse_contact_request,
)
from astraventa.api.models.endpoint_responses import RelayResponse

__all__ = [
    "ChatRequest",
    "ContactRequest",
    "InboundMessage",
    "InvalidRequestError",
    "RelayResponse",
    "parse_chat_request",
    "parse_contact_request",
]
