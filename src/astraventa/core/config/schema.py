"""Declarative schema for environment variable configuration.

This module provides a single source of truth for all environment variables,
including automatic type coercion, validation, and documentation generation.

The schema-based approach provides:
- Single definition point for all config options
- Automatic type coercion (str -> int/float/bool)
- Validation with clear error messages
- Self-documenting configuration
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type for validation (int, str, float, bool)
        description: Human-readable description for docs
        validator: Optional custom validation function
        coerce: Optional function to convert string to target type
        secret: Whether the value must be masked in any output
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    coerce: Callable[[str], Any] | None = None
    secret: bool = False


class ConfigSchema:
    """Registry of all configuration environment variables.

    Each attribute is an EnvVarSpec that defines:
    - The environment variable name
    - Default value
    - Type for validation
    - Human-readable description
    - Optional validation rules
    """

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="0.0.0.0",
        type_hint=str,
        description="Server host address to bind to",
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=8787,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=lambda x: x.split()[0].upper()
        in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    CORS_ORIGIN = EnvVarSpec(
        name="CORS_ORIGIN",
        default="*",
        type_hint=str,
        description="Origin reflected in Access-Control-Allow-Origin",
    )

    # === Metrics ===

    LOG_REQUEST_METRICS = EnvVarSpec(
        name="LOG_REQUEST_METRICS",
        default=True,
        type_hint=bool,
        description="Enable per-request START/SUCCESS/FALLBACK logging and summaries",
    )

    LOG_SUMMARY_INTERVAL = EnvVarSpec(
        name="LOG_SUMMARY_INTERVAL",
        default=100,
        type_hint=int,
        description="Number of chat requests between metrics summary lines",
        validator=lambda x: x > 0,
    )

    # === Chat Generation Settings ===

    REQUEST_TIMEOUT = EnvVarSpec(
        name="REQUEST_TIMEOUT",
        default=20.0,
        type_hint=float,
        description="Timeout in seconds for each upstream provider call",
        validator=lambda x: x > 0,
    )

    CHAT_MAX_TOKENS = EnvVarSpec(
        name="CHAT_MAX_TOKENS",
        default=300,
        type_hint=int,
        description="Maximum output tokens requested from each provider",
        validator=lambda x: x > 0,
    )

    CHAT_TEMPERATURE = EnvVarSpec(
        name="CHAT_TEMPERATURE",
        default=0.7,
        type_hint=float,
        description="Sampling temperature sent to each provider",
        validator=lambda x: 0 <= x <= 2,
    )

    # === Provider Credentials (chain order: groq, openrouter, HF router, HF inference) ===

    GROQ_API_KEY = EnvVarSpec(
        name="GROQ_API_KEY",
        default=None,
        type_hint=str,
        description="Groq API key (provider 1)",
        secret=True,
    )

    OPENROUTER_API_KEY = EnvVarSpec(
        name="OPENROUTER_API_KEY",
        default=None,
        type_hint=str,
        description="OpenRouter API key (provider 2)",
        secret=True,
    )

    OPENROUTER_REFERER = EnvVarSpec(
        name="OPENROUTER_REFERER",
        default="https://astraventa.ai",
        type_hint=str,
        description="HTTP-Referer attribution header sent to OpenRouter",
    )

    OPENROUTER_TITLE = EnvVarSpec(
        name="OPENROUTER_TITLE",
        default="Astraventa Restaurant AI",
        type_hint=str,
        description="X-Title attribution header sent to OpenRouter",
    )

    HF_TOKEN = EnvVarSpec(
        name="HF_TOKEN",
        default=None,
        type_hint=str,
        description="Hugging Face token for the OpenAI-compatible router (provider 3)",
        secret=True,
    )

    HUGGINGFACE_API_KEY = EnvVarSpec(
        name="HUGGINGFACE_API_KEY",
        default=None,
        type_hint=str,
        description="Hugging Face Inference API key (provider 4)",
        secret=True,
    )

    # === Contact Email Settings ===

    RESEND_API_KEY = EnvVarSpec(
        name="RESEND_API_KEY",
        default=None,
        type_hint=str,
        description="Resend API key; contact emails are disabled when unset",
        secret=True,
    )

    RESEND_FROM = EnvVarSpec(
        name="RESEND_FROM",
        default="notifications@cavexa.online",
        type_hint=str,
        description="Primary sender identity for contact emails",
        validator=lambda x: "@" in x,
    )

    RESEND_TO = EnvVarSpec(
        name="RESEND_TO",
        default="astraventaai@gmail.com",
        type_hint=str,
        description="Recipient of contact form submissions",
        validator=lambda x: "@" in x,
    )

    # === Conversation Store ===

    SUPABASE_URL = EnvVarSpec(
        name="SUPABASE_URL",
        default=None,
        type_hint=str,
        description="Supabase project URL used to append chat messages",
        validator=lambda x: x.startswith(("http://", "https://")),
    )

    SUPABASE_SERVICE_KEY = EnvVarSpec(
        name="SUPABASE_SERVICE_KEY",
        default=None,
        type_hint=str,
        description="Supabase key with insert rights on the messages table",
        secret=True,
    )

    SUPABASE_MESSAGES_TABLE = EnvVarSpec(
        name="SUPABASE_MESSAGES_TABLE",
        default="messages",
        type_hint=str,
        description="Table receiving appended chat messages",
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

    @classmethod
    def get_spec(cls, name: str) -> EnvVarSpec | None:
        """Get specification for a specific env var by name.

        Args:
            name: The environment variable name (e.g., "PORT")

        Returns:
            EnvVarSpec if found, None otherwise
        """
        for spec in cls.all_specs().values():
            if spec.name == name:
                return spec
        return None

    @classmethod
    def generate_markdown_docs(cls) -> str:
        """Generate Markdown documentation for all environment variables.

        Returns:
            Markdown documentation string
        """
        lines = ["# Configuration Options\n\n"]
        lines.extend(
            [
                "This document is auto-generated from `ConfigSchema`.\n\n",
                "## Environment Variables\n\n",
            ]
        )

        specs = cls.all_specs()
        for _name, spec in sorted(specs.items()):
            default_repr = f"`{spec.default}`" if spec.default is not None else "None"
            lines.extend(
                [
                    f"### `{spec.name}`\n\n",
                    f"- **Type**: `{spec.type_hint.__name__}`\n",
                    f"- **Default**: {default_repr}\n",
                    f"- **Description**: {spec.description}\n\n",
                ]
            )

        return "\n".join(lines)
