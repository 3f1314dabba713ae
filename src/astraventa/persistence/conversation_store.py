"""Append-only conversation store backed by Supabase (PostgREST).

Writes are fire-and-forget: they run after the chat response has been sent
and a failed write is logged, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import httpx

from astraventa.models.chat import ChatMessage

if TYPE_CHECKING:
    from astraventa.core.config import Config

logger = logging.getLogger(__name__)

STORE_TIMEOUT_SECONDS = 10.0


class ConversationStore:
    """Appends chat messages to a Supabase table."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "messages",
        timeout: float = STORE_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.api_key = api_key
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_config(cls, config: "Config") -> "ConversationStore | None":
        """Return a store, or None when Supabase is not configured."""
        if not config.store_configured:
            return None
        return cls(
            base_url=config.supabase_url or "",
            api_key=config.supabase_service_key or "",
            table=config.supabase_messages_table,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }

    @staticmethod
    def build_rows(
        conversation_id: str,
        messages: Sequence[ChatMessage],
        client_id: str | None = None,
        model_identifier: str | None = None,
    ) -> list[dict[str, Any]]:
        rows = []
        for message in messages:
            row: dict[str, Any] = {
                "conversation_id": conversation_id,
                "role": message.role,
                "content": message.content,
            }
            if client_id:
                row["client_id"] = client_id
            if message.role == "assistant" and model_identifier:
                row["model"] = model_identifier
            rows.append(row)
        return rows

    async def append(
        self,
        conversation_id: str,
        messages: Sequence[ChatMessage],
        *,
        client_id: str | None = None,
        model_identifier: str | None = None,
    ) -> bool:
        """Append messages in order; returns whether the write was accepted."""
        if not messages:
            return True

        rows = self.build_rows(conversation_id, messages, client_id, model_identifier)
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.endpoint, json=rows, headers=self._headers(), timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.endpoint, json=rows, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"💾 Conversation store write failed for {conversation_id}: {e!r}")
            return False

        if not response.is_success:
            logger.warning(
                f"💾 Conversation store rejected write for {conversation_id}: "
                f"HTTP {response.status_code} {response.text[:200]}"
            )
            return False

        logger.debug(f"💾 Stored {len(rows)} message(s) for conversation {conversation_id}")
        return True
