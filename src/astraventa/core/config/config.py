"""Configuration object for Astraventa Relay.

Configuration is read from the environment exactly once, when a ``Config`` is
constructed, and exposed through read-only properties grouped by concern:
- server: host, port, log level, CORS origin
- chat: provider credentials, timeout, generation parameters
- email: Resend credentials and sender identities
- store: Supabase conversation store
- metrics: request metrics logging
"""

import hashlib
from collections.abc import Mapping
from typing import Any

from astraventa.core.config.schema import ConfigSchema
from astraventa.core.config.validation import load_env_var
from astraventa.core.provider.provider_config import DEFAULT_PROVIDER_CHAIN, ProviderConfig


class Config:
    """Configuration with direct access to all settings.

    All values are loaded at initialization time from environment variables
    using schema-based validation. Invalid values raise ``ConfigError``.
    Pass ``environ`` to build a config from an explicit mapping instead of
    ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, Any] = {
            name: load_env_var(spec, environ) for name, spec in ConfigSchema.all_specs().items()
        }
        self._provider_configs = self._build_provider_configs()

    @staticmethod
    def get_api_key_hash(api_key: str | None) -> str:
        """Return first 8 chars of sha256 hash, or a placeholder when unset"""
        if not api_key:
            return "<unset>"
        return hashlib.sha256(api_key.encode()).hexdigest()[:8]

    def _build_provider_configs(self) -> list[ProviderConfig]:
        configs = []
        for default in DEFAULT_PROVIDER_CHAIN:
            custom_headers = {}
            if default.name == "openrouter":
                custom_headers = {
                    "HTTP-Referer": self._values["OPENROUTER_REFERER"],
                    "X-Title": self._values["OPENROUTER_TITLE"],
                }
            configs.append(
                default.with_settings(
                    api_key=self._values[default.api_key_env],
                    timeout=self.request_timeout,
                    custom_headers=custom_headers,
                )
            )
        return configs

    # Server settings
    @property
    def host(self) -> str:
        return self._values["HOST"]

    @property
    def port(self) -> int:
        return self._values["PORT"]

    @property
    def log_level(self) -> str:
        # Extract just the first word to handle inline comments
        return self._values["LOG_LEVEL"].split()[0].upper()

    @property
    def cors_origin(self) -> str:
        return self._values["CORS_ORIGIN"]

    # Metrics settings
    @property
    def log_request_metrics(self) -> bool:
        return self._values["LOG_REQUEST_METRICS"]

    @property
    def log_summary_interval(self) -> int:
        return self._values["LOG_SUMMARY_INTERVAL"]

    # Chat settings
    @property
    def request_timeout(self) -> float:
        return self._values["REQUEST_TIMEOUT"]

    @property
    def chat_max_tokens(self) -> int:
        return self._values["CHAT_MAX_TOKENS"]

    @property
    def chat_temperature(self) -> float:
        return self._values["CHAT_TEMPERATURE"]

    @property
    def provider_configs(self) -> list[ProviderConfig]:
        """Provider configurations in priority order"""
        return list(self._provider_configs)

    # Email settings
    @property
    def resend_api_key(self) -> str | None:
        return self._values["RESEND_API_KEY"]

    @property
    def resend_from(self) -> str:
        return self._values["RESEND_FROM"]

    @property
    def resend_to(self) -> str:
        return self._values["RESEND_TO"]

    @property
    def email_configured(self) -> bool:
        return bool(self.resend_api_key)

    # Conversation store settings
    @property
    def supabase_url(self) -> str | None:
        url = self._values["SUPABASE_URL"]
        return url.rstrip("/") if url else None

    @property
    def supabase_service_key(self) -> str | None:
        return self._values["SUPABASE_SERVICE_KEY"]

    @property
    def supabase_messages_table(self) -> str:
        return self._values["SUPABASE_MESSAGES_TABLE"]

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)
