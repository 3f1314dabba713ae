"""Chat relay service: request metrics, routing and outcome mapping.

This module connects the HTTP boundary to the provider chain router. The
router never raises for provider problems; the outcome tag alone decides
between a 200 and a 503 response.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import TYPE_CHECKING

from fastapi import BackgroundTasks

from astraventa.api.models.endpoint_requests import ChatRequest
from astraventa.api.models.endpoint_responses import RelayResponse
from astraventa.core.error_types import ErrorType
from astraventa.core.logging import ConversationLogger, RequestTracker, conversation_logger
from astraventa.core.router import DisconnectProbe, ProviderChainRouter, RequestCancelledError
from astraventa.models.chat import AllProvidersFailed, ChatMessage, RouterOutcome
from astraventa.persistence.conversation_store import ConversationStore

if TYPE_CHECKING:
    from astraventa.core.config import Config

logger = logging.getLogger(__name__)


class ChatService:
    """Runs one chat request through the router and shapes the reply.

    Args:
        router: The provider chain router.
        store: Optional conversation store for fire-and-forget writes.
        tracker: Optional request tracker; when None, metrics lines are skipped.
    """

    def __init__(
        self,
        router: ProviderChainRouter,
        *,
        store: ConversationStore | None = None,
        tracker: RequestTracker | None = None,
    ) -> None:
        self.router = router
        self.store = store
        self.tracker = tracker

    @classmethod
    def from_config(cls, config: "Config", router: ProviderChainRouter) -> "ChatService":
        tracker = RequestTracker(config.log_summary_interval) if config.log_request_metrics else None
        return cls(router, store=ConversationStore.from_config(config), tracker=tracker)

    @staticmethod
    def outcome_to_response(outcome: RouterOutcome) -> RelayResponse:
        if isinstance(outcome, AllProvidersFailed):
            return RelayResponse(status=503, content=outcome.to_payload())
        return RelayResponse(status=200, content=outcome.to_payload())

    async def handle(
        self,
        chat_request: ChatRequest,
        *,
        client_id: str | None = None,
        is_disconnected: DisconnectProbe | None = None,
        background_tasks: BackgroundTasks | None = None,
    ) -> RelayResponse:
        """Route the conversation and map the outcome to a relay response.

        Raises:
            RequestCancelledError: the client disconnected mid-chain.
        """
        request_id = str(uuid.uuid4())
        history = chat_request.history()

        with ConversationLogger.correlation_context(request_id):
            if self.tracker is not None:
                metrics = self.tracker.start_request(
                    request_id,
                    conversation_id=chat_request.conversation_id,
                    message_count=len(history),
                )
                metrics.request_size = len(
                    json.dumps([message.to_dict() for message in history])
                )
                conversation_logger.info(
                    f"🚀 START | Messages: {len(history)} | "
                    f"Size: {metrics.request_size:,} bytes | "
                    f"Providers: {len(self.router.configured_providers)}/{len(self.router.providers)}"
                )
            else:
                logger.debug(f"Processing chat request with {len(history)} message(s)")

            try:
                outcome = await self.router.route(history, is_disconnected=is_disconnected)
                self._finish(request_id, outcome)
            except RequestCancelledError as e:
                self._abandon(request_id, str(e))
                raise
            finally:
                # Also reached when the task itself is cancelled mid-route
                self._abandon(request_id, "request task cancelled")

            if isinstance(outcome, AllProvidersFailed):
                reply_text, model_identifier = outcome.fallback_content, None
            else:
                reply_text, model_identifier = outcome.content, outcome.model_identifier

            self._schedule_store_write(
                chat_request,
                reply_text,
                model_identifier=model_identifier,
                client_id=client_id,
                background_tasks=background_tasks,
            )

        return self.outcome_to_response(outcome)

    def _finish(self, request_id: str, outcome: RouterOutcome) -> None:
        if self.tracker is None:
            return
        if isinstance(outcome, AllProvidersFailed):
            conversation_logger.warning(f"🛟 FALLBACK | {outcome.error}")
            self.tracker.end_request(
                request_id,
                fallback=True,
                error=outcome.error,
                error_type=ErrorType.ALL_PROVIDERS_FAILED.value,
            )
        else:
            conversation_logger.info(
                f"✅ SUCCESS | Model: {outcome.model_identifier} | "
                f"Latency: {outcome.latency_ms}ms | Reply: {len(outcome.content):,} chars"
            )
            self.tracker.end_request(request_id, model_identifier=outcome.model_identifier)

    def _abandon(self, request_id: str, reason: str) -> None:
        """End tracking for a request that will not produce a reply; no-op once ended."""
        if self.tracker is None or self.tracker.get_request(request_id) is None:
            return
        self.tracker.end_request(request_id, error=reason, error_type=ErrorType.CANCELLED.value)

    def _schedule_store_write(
        self,
        chat_request: ChatRequest,
        reply_text: str,
        *,
        model_identifier: str | None,
        client_id: str | None,
        background_tasks: BackgroundTasks | None,
    ) -> None:
        """Queue the last user turn and the reply for the store, after the response."""
        if self.store is None or background_tasks is None or not chat_request.conversation_id:
            return

        to_store = []
        if chat_request.last_user_message is not None:
            to_store.append(ChatMessage(role="user", content=chat_request.last_user_message))
        to_store.append(ChatMessage(role="assistant", content=reply_text))

        background_tasks.add_task(
            self.store.append,
            chat_request.conversation_id,
            to_store,
            client_id=client_id,
            model_identifier=model_identifier,
        )
