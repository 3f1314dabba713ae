"""Loading of environment variables against ``ConfigSchema``.

Each variable is read once, coerced to its declared type and checked with its
validator. Problems surface as ``ConfigError`` carrying the variable name, so
``astra config validate`` can list every one of them in a single run.
"""

import os
from collections.abc import Callable, Mapping
from typing import Any

from astraventa.core.config.schema import ConfigSchema, EnvVarSpec

MASKED_VALUE = "***"

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


class ConfigError(Exception):
    """An environment variable that cannot be used as configured.

    Attributes:
        env_var: The environment variable name
        value: The raw value, masked for secrets
        message: What is wrong with it
    """

    def __init__(self, env_var: str, value: str, message: str) -> None:
        self.env_var = env_var
        self.value = value
        self.message = message
        super().__init__(f"{env_var}={value}: {message}")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


_COERCERS: dict[type, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
    str: str.strip,
}


def _shown(spec: EnvVarSpec, raw_value: str) -> str:
    return MASKED_VALUE if spec.secret else raw_value


def load_env_var(spec: EnvVarSpec, environ: Mapping[str, str] | None = None) -> Any:
    """Return the typed value of one variable, or its default when unset.

    Blank values count as unset, so ``GROQ_API_KEY=`` in a ``.env`` file
    behaves like a missing key.

    Raises:
        ConfigError: the value cannot be coerced or fails its validator.
    """
    source = os.environ if environ is None else environ
    raw_value = source.get(spec.name)
    if raw_value is None or not raw_value.strip():
        return spec.default

    coerce = spec.coerce or _COERCERS.get(spec.type_hint, str.strip)
    try:
        value = coerce(raw_value)
    except (ValueError, TypeError) as e:
        raise ConfigError(
            spec.name,
            _shown(spec, raw_value),
            f"Cannot convert to {spec.type_hint.__name__}: {e}",
        ) from e

    if spec.validator is None:
        return value

    try:
        valid = spec.validator(value)
    except (TypeError, AttributeError, IndexError) as e:
        raise ConfigError(spec.name, _shown(spec, raw_value), f"Validation error: {e}") from e
    if not valid:
        raise ConfigError(spec.name, _shown(spec, raw_value), f"Invalid value: {spec.description}")
    return value


def load_all_specs(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Load every schema variable; failures come back as ``ConfigError`` values."""
    result: dict[str, Any] = {}
    for name, spec in ConfigSchema.all_specs().items():
        try:
            result[name] = load_env_var(spec, environ)
        except ConfigError as e:
            result[name] = e
    return result


def validate_all(environ: Mapping[str, str] | None = None) -> list[ConfigError]:
    """Return every configuration error instead of stopping at the first."""
    return [
        value for value in load_all_specs(environ).values() if isinstance(value, ConfigError)
    ]
