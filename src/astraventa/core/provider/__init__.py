"""Upstream text-generation providers."""

from astraventa.core.provider.base import ChatProvider, ProviderError
from astraventa.core.provider.client_factory import build_provider_chain, create_provider
from astraventa.core.provider.hf_inference import HuggingFaceInferenceProvider
from astraventa.core.provider.openai_compatible import OpenAICompatibleProvider
from astraventa.core.provider.provider_config import DEFAULT_PROVIDER_CHAIN, ProviderConfig

__all__ = [
    "ChatProvider",
    "DEFAULT_PROVIDER_CHAIN",
    "HuggingFaceInferenceProvider",
    "OpenAICompatibleProvider",
    "ProviderConfig",
    "ProviderError",
    "build_provider_chain",
    "create_provider",
]
