from astraventa.models.chat import (
    AllProvidersFailed,
    ChatMessage,
    ProviderResult,
    RouterOutcome,
    RouteSuccess,
)

__all__ = [
    "AllProvidersFailed",
    "ChatMessage",
    "ProviderResult",
    "RouteSuccess",
    "RouterOutcome",
]
