"""
Configuration objects and helpers for the Pi backend SDK.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .environment import build_environment

__all__ = [
    "ConfigError",
    "SdkConfig",
    "load_sdk_config",
]

_REQUIRED_KEYS = (
    "PI_BACKEND_HORIZON_MAINNET_URL",
    "PI_BACKEND_HORIZON_MAINNET_PASSPHRASE",
    "PI_BACKEND_HORIZON_TESTNET_URL",
    "PI_BACKEND_HORIZON_TESTNET_PASSPHRASE",
    "PI_BACKEND_PLATFORM_BASE_URL",
)

DEFAULT_TIMEBOUNDS_SECONDS = 180
DEFAULT_TIMEOUT_MS = 20000
PLATFORM_API_VERSION = "v2"


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _require(values: Mapping[str, str], key: str) -> str:
    value = (values.get(key) or "").strip()
    if not value:
        raise ConfigError(f"Missing required environment variable: {key}")
    return value


def _positive_int(values: Mapping[str, str], key: str, default: int) -> int:
    raw = values.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        parsed = int(str(raw).strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got '{raw}'") from exc
    if parsed <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return parsed


@dataclass(frozen=True)
class SdkConfig:
    horizon_mainnet_url: str
    horizon_mainnet_passphrase: str
    horizon_testnet_url: str
    horizon_testnet_passphrase: str
    platform_base_url: str
    default_timebounds: int = DEFAULT_TIMEBOUNDS_SECONDS
    request_timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def platform_api_url(self) -> str:
        return f"{self.platform_base_url}/{PLATFORM_API_VERSION}"

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000

    def is_mainnet(self, passphrase: str) -> bool:
        return passphrase == self.horizon_mainnet_passphrase

    def horizon_url_for(self, passphrase: str) -> str:
        """Pick the Horizon server matching a payment's network passphrase."""
        if self.is_mainnet(passphrase):
            return self.horizon_mainnet_url
        return self.horizon_testnet_url

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "SdkConfig":
        for key in _REQUIRED_KEYS:
            _require(values, key)

        return cls(
            horizon_mainnet_url=_require(values, "PI_BACKEND_HORIZON_MAINNET_URL").rstrip("/"),
            horizon_mainnet_passphrase=_require(values, "PI_BACKEND_HORIZON_MAINNET_PASSPHRASE"),
            horizon_testnet_url=_require(values, "PI_BACKEND_HORIZON_TESTNET_URL").rstrip("/"),
            horizon_testnet_passphrase=_require(values, "PI_BACKEND_HORIZON_TESTNET_PASSPHRASE"),
            platform_base_url=_require(values, "PI_BACKEND_PLATFORM_BASE_URL").rstrip("/"),
            default_timebounds=_positive_int(
                values, "PI_BACKEND_HORIZON_DEFAULT_TIMEBOUNDS", DEFAULT_TIMEBOUNDS_SECONDS
            ),
            request_timeout_ms=_positive_int(
                values, "PI_BACKEND_HORIZON_TIMEOUT_MS", DEFAULT_TIMEOUT_MS
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = None,
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        skip_env_file: bool = False,
    ) -> "SdkConfig":
        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=overrides,
            skip_env_file=skip_env_file,
        )
        return cls.from_mapping(environment.variables)


def load_sdk_config(
    *,
    env_file: Optional[str] = None,
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    skip_env_file: bool = False,
) -> SdkConfig:
    """
    Convenience wrapper that mirrors :meth:`SdkConfig.from_env`.

    The configuration can be provided through environment variables, a
    ``.env.<PI_ENV>`` file, explicit overrides, or any combination of the three.
    """
    return SdkConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        skip_env_file=skip_env_file,
    )
