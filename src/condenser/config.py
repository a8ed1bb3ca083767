"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from condenser.errors import ConfigError

ENV_PREFIX = "CONDENSER_"

_FALSE_VALUES = {"0", "false", "off", "no"}


def _env(name: str) -> str | None:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(name: str, default: int | None) -> int | None:
    value = _env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}")


def _env_float(name: str, default: float) -> float:
    value = _env(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number, got {value!r}")


@dataclass
class Settings:
    """Knobs for the compression pipeline and the CLI."""

    provider: str = "openai"
    model: str | None = None  # None means the provider's default
    max_output_tokens: int | None = None  # None means the model registry value
    temperature: float = 0.3
    timeout: float = 180.0  # seconds per LLM call
    compression_enabled: bool = True
    max_concurrent: int = 3

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``CONDENSER_*`` environment variables."""
        compression = _env("COMPRESSION")
        return cls(
            provider=_env("PROVIDER") or cls.provider,
            model=_env("MODEL"),
            max_output_tokens=_env_int("MAX_OUTPUT_TOKENS", None),
            temperature=_env_float("TEMPERATURE", cls.temperature),
            timeout=_env_float("TIMEOUT", cls.timeout),
            compression_enabled=compression is None or compression.lower() not in _FALSE_VALUES,
            max_concurrent=_env_int("MAX_CONCURRENT", cls.max_concurrent),
        )
