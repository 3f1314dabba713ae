"""Builds the ordered provider chain from configuration."""

from typing import TYPE_CHECKING

import httpx

from astraventa.core.provider.base import ChatProvider
from astraventa.core.provider.hf_inference import HuggingFaceInferenceProvider
from astraventa.core.provider.openai_compatible import OpenAICompatibleProvider
from astraventa.core.provider.provider_config import ProviderConfig

if TYPE_CHECKING:
    from astraventa.core.config import Config


def create_provider(
    provider_config: ProviderConfig,
    *,
    max_tokens: int,
    temperature: float,
    http_client: httpx.AsyncClient | None = None,
) -> ChatProvider:
    """Create the adapter matching the provider's api_format.

    Args:
        provider_config: The provider configuration.
        max_tokens: Output length bound sent with every request.
        temperature: Sampling temperature sent with every request.
        http_client: Optional shared client; a short-lived one is used per call otherwise.

    Returns:
        A ChatProvider instance.
    """
    provider_class: type[ChatProvider] = (
        HuggingFaceInferenceProvider
        if provider_config.is_hf_inference_format
        else OpenAICompatibleProvider
    )
    return provider_class(
        provider_config,
        max_tokens=max_tokens,
        temperature=temperature,
        http_client=http_client,
    )


def build_provider_chain(
    config: "Config", http_client: httpx.AsyncClient | None = None
) -> list[ChatProvider]:
    """Create one adapter per configured provider, keeping priority order.

    Providers without a credential are included; the router skips them.
    """
    return [
        create_provider(
            provider_config,
            max_tokens=config.chat_max_tokens,
            temperature=config.chat_temperature,
            http_client=http_client,
        )
        for provider_config in config.provider_configs
    ]
