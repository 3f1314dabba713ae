from dataclasses import dataclass, field, replace
from typing import Dict, Optional

API_FORMATS = ("openai", "hf-inference")


@dataclass(frozen=True)
class ProviderConfig:
    """Configuration for a specific provider"""

    name: str
    model: str  # model requested upstream
    model_identifier: str  # model reported to callers
    base_url: str  # full endpoint URL
    api_key_env: str
    api_key: Optional[str] = None
    timeout: float = 20.0
    custom_headers: Dict[str, str] = field(default_factory=dict)
    api_format: str = "openai"  # "openai" or "hf-inference"

    @property
    def is_configured(self) -> bool:
        """A provider without a credential is never attempted"""
        return bool(self.api_key)

    @property
    def is_hf_inference_format(self) -> bool:
        return self.api_format == "hf-inference"

    def with_settings(self, **changes: object) -> "ProviderConfig":
        return replace(self, **changes)

    def __post_init__(self) -> None:
        """Validate configuration after initialization"""
        if not self.name:
            raise ValueError("Provider name is required")
        if not self.base_url:
            raise ValueError(f"Base URL is required for provider '{self.name}'")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive for provider '{self.name}'")
        if self.api_format not in API_FORMATS:
            raise ValueError(
                f"Invalid API format '{self.api_format}' for provider '{self.name}'. "
                f"Must be one of {', '.join(API_FORMATS)}"
            )


# Priority order: free/fast providers first, raw inference API last.
DEFAULT_PROVIDER_CHAIN = (
    ProviderConfig(
        name="groq",
        model="llama-3.1-70b-versatile",
        model_identifier="llama-3.1-70b",
        base_url="https://api.groq.com/openai/v1/chat/completions",
        api_key_env="GROQ_API_KEY",
    ),
    ProviderConfig(
        name="openrouter",
        model="meta-llama/llama-3.3-8b-instruct:free",
        model_identifier="llama-3.3-8b",
        base_url="https://openrouter.ai/api/v1/chat/completions",
        api_key_env="OPENROUTER_API_KEY",
    ),
    ProviderConfig(
        name="huggingface-router",
        model="MiniMaxAI/MiniMax-M2:novita",
        model_identifier="minimax-m2-router",
        base_url="https://router.huggingface.co/v1/chat/completions",
        api_key_env="HF_TOKEN",
    ),
    ProviderConfig(
        name="huggingface-inference",
        model="meta-llama/Llama-3.1-8B-Instruct",
        model_identifier="llama-3.1-8b-hf",
        base_url="https://api-inference.huggingface.co/models/meta-llama/Llama-3.1-8B-Instruct",
        api_key_env="HUGGINGFACE_API_KEY",
        api_format="hf-inference",
    ),
)
