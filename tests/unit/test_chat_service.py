import asyncio
import logging

import pytest
from fastapi import BackgroundTasks

from astraventa.api.models.endpoint_requests import parse_chat_request
from astraventa.api.services.chat_service import ChatService
from astraventa.core.logging import RequestTracker
from astraventa.core.prompts import FALLBACK_REPLY
from astraventa.core.router import RequestCancelledError
from astraventa.models.chat import AllProvidersFailed, RouteSuccess

CHAT = parse_chat_request(
    {"messages": [{"role": "user", "content": "Hi"}], "conversationIdentifier": "conv-1"}
)


class StubRouter:
    def __init__(self, outcome=None, error=None):
        self.outcome = outcome
        self.error = error
        self.providers = ()
        self.configured_providers = []

    async def route(self, history, *, is_disconnected=None):
        if self.error is not None:
            raise self.error
        return self.outcome


class RecordingStore:
    def __init__(self):
        self.writes = []

    async def append(self, conversation_id, messages, *, client_id=None, model_identifier=None):
        self.writes.append((conversation_id, list(messages), client_id, model_identifier))
        return True


@pytest.mark.unit
def test_outcome_maps_to_status():
    success = ChatService.outcome_to_response(RouteSuccess("Hi", "llama-3.1-70b", 40))
    failure = ChatService.outcome_to_response(AllProvidersFailed(FALLBACK_REPLY, "down"))

    assert (success.status, success.ok) == (200, True)
    assert success.content == {
        "ok": True,
        "content": "Hi",
        "modelIdentifier": "llama-3.1-70b",
        "latencyMs": 40,
    }
    assert (failure.status, failure.ok) == (503, False)
    assert failure.content["fallback"] == FALLBACK_REPLY


@pytest.mark.unit
def test_latency_is_omitted_when_unknown():
    response = ChatService.outcome_to_response(RouteSuccess("Hi", "m"))

    assert "latencyMs" not in response.content


@pytest.mark.unit
@pytest.mark.asyncio
class TestChatService:
    async def test_success_is_tracked_and_stored(self, caplog):
        tracker = RequestTracker()
        store = RecordingStore()
        service = ChatService(
            StubRouter(RouteSuccess("Hello!", "llama-3.1-70b", 10)), store=store, tracker=tracker
        )
        background_tasks = BackgroundTasks()

        with caplog.at_level(logging.INFO):
            result = await service.handle(
                CHAT, client_id="web-1", background_tasks=background_tasks
            )
        await background_tasks()

        assert result.status == 200
        assert tracker.summary_metrics.model_counts == {"llama-3.1-70b": 1}
        assert "SUCCESS" in caplog.text
        conversation_id, messages, client_id, model = store.writes[0]
        assert conversation_id == "conv-1"
        assert [(m.role, m.content) for m in messages] == [("user", "Hi"), ("assistant", "Hello!")]
        assert (client_id, model) == ("web-1", "llama-3.1-70b")

    async def test_fallback_is_counted(self):
        tracker = RequestTracker()
        service = ChatService(StubRouter(AllProvidersFailed(FALLBACK_REPLY, "down")), tracker=tracker)

        result = await service.handle(CHAT)

        assert result.status == 503
        assert tracker.summary_metrics.total_fallbacks == 1
        assert tracker.summary_metrics.error_counts == {"all_providers_failed": 1}

    async def test_cancellation_is_recorded_and_reraised(self):
        tracker = RequestTracker()
        service = ChatService(StubRouter(error=RequestCancelledError("gone")), tracker=tracker)

        with pytest.raises(RequestCancelledError):
            await service.handle(CHAT)

        assert tracker.summary_metrics.error_counts == {"cancelled": 1}
        assert tracker.active_requests == {}

    async def test_task_cancellation_does_not_leak_tracked_requests(self):
        tracker = RequestTracker()
        service = ChatService(StubRouter(error=asyncio.CancelledError()), tracker=tracker)

        with pytest.raises(asyncio.CancelledError):
            await service.handle(CHAT)

        assert tracker.active_requests == {}
        assert tracker.summary_metrics.error_counts == {"cancelled": 1}

    async def test_finished_request_is_not_counted_as_cancelled(self):
        tracker = RequestTracker()
        service = ChatService(StubRouter(RouteSuccess("Hi", "m")), tracker=tracker)

        await service.handle(CHAT)

        assert tracker.active_requests == {}
        assert tracker.summary_metrics.total_errors == 0

    async def test_without_background_tasks_nothing_is_stored(self):
        store = RecordingStore()
        service = ChatService(StubRouter(RouteSuccess("Hi", "m")), store=store)

        await service.handle(CHAT)

        assert store.writes == []
