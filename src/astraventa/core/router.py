"""Ordered multi-provider fallback for chat replies.

The router tries providers strictly in priority order and commits to the
first one whose sanitized reply is non-empty. Providers without a credential
are skipped without a network call; every other failure is logged and the
chain moves on. When nothing is left, the caller gets ``AllProvidersFailed``
with a fixed safe reply instead of an exception.

No state survives between calls: each invocation starts again from the top
of the chain.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from astraventa.core.error_types import ErrorType
from astraventa.core.prompts import (
    ALL_PROVIDERS_FAILED_ERROR,
    FALLBACK_REPLY,
    RESTAURANT_SYSTEM_PROMPT,
)
from astraventa.core.provider.base import ChatProvider, ProviderError
from astraventa.core.sanitizer import sanitize
from astraventa.models.chat import (
    AllProvidersFailed,
    ChatMessage,
    ProviderResult,
    RouterOutcome,
    RouteSuccess,
)

logger = logging.getLogger(__name__)

DisconnectProbe = Callable[[], Awaitable[bool]]

# Seconds between disconnect checks while a provider call is in flight
DISCONNECT_POLL_INTERVAL = 0.5


class RequestCancelledError(Exception):
    """The caller went away before the chain finished."""


class ProviderChainRouter:
    """Routes a conversation through an ordered list of providers.

    Args:
        providers: Providers in priority order (at least one).
        system_prompt: Persona prompt prepended to every conversation.
        fallback_content: Reply carried by ``AllProvidersFailed``.
        failure_message: Error text carried by ``AllProvidersFailed``.
        disconnect_poll_interval: Seconds between disconnect checks during a call.
    """

    def __init__(
        self,
        providers: Sequence[ChatProvider],
        system_prompt: str = RESTAURANT_SYSTEM_PROMPT,
        fallback_content: str = FALLBACK_REPLY,
        failure_message: str = ALL_PROVIDERS_FAILED_ERROR,
        disconnect_poll_interval: float = DISCONNECT_POLL_INTERVAL,
    ) -> None:
        if not providers:
            raise ValueError("At least one provider is required")
        self.providers = tuple(providers)
        self.system_prompt = system_prompt
        self.fallback_content = fallback_content
        self.failure_message = failure_message
        self.disconnect_poll_interval = disconnect_poll_interval

    @property
    def configured_providers(self) -> list[ChatProvider]:
        return [provider for provider in self.providers if provider.is_configured()]

    def build_messages(self, history: Sequence[ChatMessage]) -> list[ChatMessage]:
        """Prepend the persona prompt; callers never supply their own system message."""
        return [ChatMessage(role="system", content=self.system_prompt), *history]

    async def route(
        self,
        history: Sequence[ChatMessage],
        *,
        is_disconnected: DisconnectProbe | None = None,
    ) -> RouterOutcome:
        """Return the first usable reply, or the fallback when the chain is exhausted.

        Raises:
            RequestCancelledError: ``is_disconnected`` reported the caller gone,
                either before a provider call or while one was in flight.
        """
        messages = self.build_messages(history)

        for position, provider in enumerate(self.providers, start=1):
            if not provider.is_configured():
                logger.debug(
                    f"⏭️  Skipping {provider.name} ({ErrorType.MISSING_CREDENTIAL.value})"
                )
                continue

            if is_disconnected is not None and await is_disconnected():
                logger.info(f"🛑 Client disconnected before {provider.name}, abandoning chain")
                raise RequestCancelledError(f"client disconnected before {provider.name}")

            try:
                result = await self._invoke(provider, messages, is_disconnected)
            except ProviderError as e:
                status = f" (HTTP {e.status_code})" if e.status_code else ""
                logger.warning(
                    f"⚠️  Provider {position} {provider.name} failed: "
                    f"{e.error_type.value}{status} | {e.message}"
                )
                continue
            except Exception as e:
                logger.exception(
                    f"⚠️  Provider {position} {provider.name} raised unexpectedly "
                    f"({ErrorType.UNEXPECTED_ERROR.value}): {e}"
                )
                continue

            content = sanitize(result.content)
            if not content:
                # The call itself succeeded; keep this distinct from transport errors
                logger.warning(
                    f"⚠️  Provider {position} {provider.name} returned no usable content "
                    f"({ErrorType.EMPTY_CONTENT.value}, raw length {len(result.content)})"
                )
                continue

            logger.info(
                f"✅ Provider {position} {provider.name} answered | "
                f"Model: {result.model_identifier} | Latency: {result.latency_ms}ms"
            )
            return RouteSuccess(
                content=content,
                model_identifier=result.model_identifier,
                latency_ms=result.latency_ms,
            )

        logger.warning(
            f"❌ All providers failed ({len(self.configured_providers)} of "
            f"{len(self.providers)} configured), serving fallback reply"
        )
        return AllProvidersFailed(
            fallback_content=self.fallback_content, error=self.failure_message
        )

    async def _invoke(
        self,
        provider: ChatProvider,
        messages: Sequence[ChatMessage],
        is_disconnected: DisconnectProbe | None,
    ) -> ProviderResult:
        """Run one provider call, abandoning it if the caller disconnects meanwhile."""
        if is_disconnected is None:
            return await provider.invoke(messages)

        call = asyncio.ensure_future(provider.invoke(messages))
        watcher = asyncio.ensure_future(self._wait_for_disconnect(is_disconnected))
        try:
            done, _ = await asyncio.wait({call, watcher}, return_when=asyncio.FIRST_COMPLETED)
            if call in done:
                return call.result()
            watcher.result()
            logger.info(f"🛑 Client disconnected during {provider.name}, abandoning chain")
            raise RequestCancelledError(f"client disconnected during {provider.name}")
        finally:
            for task in (call, watcher):
                if not task.done():
                    task.cancel()

    async def _wait_for_disconnect(self, is_disconnected: DisconnectProbe) -> None:
        while not await is_disconnected():
            await asyncio.sleep(self.disconnect_poll_interval)
