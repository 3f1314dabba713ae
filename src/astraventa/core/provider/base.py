"""Provider abstraction shared by every upstream text-generation adapter.

Adapters translate the router's generic message list into one upstream
request shape and pull the generated text back out. Everything that can go
wrong on the way is reported as a ``ProviderError``; the router decides what
happens next.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import httpx

from astraventa.core.error_types import ErrorType
from astraventa.core.provider.provider_config import ProviderConfig
from astraventa.models.chat import ChatMessage, ProviderResult

logger = logging.getLogger(__name__)

# How much of an upstream error body ends up in logs
ERROR_BODY_EXCERPT = 300


class ProviderError(Exception):
    """Raised when a provider call yields no usable result.

    Attributes:
        provider: Name of the provider that failed
        error_type: Failure category
        message: Human-readable detail for logs
        status_code: Upstream HTTP status, when one was received
    """

    def __init__(
        self,
        provider: str,
        error_type: ErrorType,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.error_type = error_type
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider}: {error_type.value}: {message}")


class ChatProvider(ABC):
    """One upstream text-generation API.

    Subclasses implement the request payload and the response extraction;
    transport, status handling, timing and error classification live here.
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        max_tokens: int,
        temperature: float,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._http_client = http_client

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def model_identifier(self) -> str:
        return self.config.model_identifier

    def is_configured(self) -> bool:
        return self.config.is_configured

    def build_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        headers.update(self.config.custom_headers)
        return headers

    @abstractmethod
    def build_payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        """Translate the message list into the upstream request body."""

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """Pull generated text out of a decoded response body.

        Returns ``""`` when the provider answered without content and raises
        ``KeyError``/``IndexError``/``TypeError``/``AttributeError`` when the
        body does not have the expected shape.
        """

    async def invoke(self, messages: Sequence[ChatMessage]) -> ProviderResult:
        """Send one generation request and return the raw generated text."""
        if not self.is_configured():
            raise ProviderError(self.name, ErrorType.MISSING_CREDENTIAL, "no API key configured")

        payload = self.build_payload(messages)

        start_time = time.perf_counter()
        response = await self._post(payload)

        if not response.is_success:
            raise ProviderError(
                self.name,
                ErrorType.UPSTREAM_HTTP_ERROR,
                f"HTTP {response.status_code}: {response.text[:ERROR_BODY_EXCERPT]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                self.name,
                ErrorType.MALFORMED_RESPONSE,
                f"response body is not JSON: {e}",
                status_code=response.status_code,
            ) from e

        try:
            content = self.extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError(
                self.name,
                ErrorType.MALFORMED_RESPONSE,
                f"unexpected response shape: {e!r}",
                status_code=response.status_code,
            ) from e

        latency_ms = int(round((time.perf_counter() - start_time) * 1000))
        logger.debug(f"📥 {self.name} responded in {latency_ms}ms ({len(content)} chars)")
        return ProviderResult(
            content=content,
            model_identifier=self.model_identifier,
            latency_ms=latency_ms,
        )

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        logger.debug(f"📤 {self.name} request | Model: {self.config.model}")
        timeout = httpx.Timeout(self.config.timeout)
        try:
            if self._http_client is not None:
                return await self._http_client.post(
                    self.config.base_url,
                    json=payload,
                    headers=self.build_headers(),
                    timeout=timeout,
                )
            async with httpx.AsyncClient(timeout=timeout) as client:
                return await client.post(
                    self.config.base_url, json=payload, headers=self.build_headers()
                )
        except httpx.TimeoutException as e:
            raise ProviderError(
                self.name,
                ErrorType.UPSTREAM_TIMEOUT,
                f"no response within {self.config.timeout:g}s",
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name, ErrorType.TRANSPORT_ERROR, str(e) or repr(e)) from e
