"""
Public facade for the Pi backend SDK.

The most useful pieces are re-exported here so integrators can
``from pi_backend import ...`` without navigating the package.
"""

from .api import create_pi_network, send_a2u_payment
from .core import (
    ConfigError,
    PaymentArgs,
    PaymentError,
    PaymentRecord,
    PaymentStatus,
    PaymentTransaction,
    PiNetwork,
    SdkConfig,
    SdkEnvironment,
    build_environment,
    load_env_file,
    load_sdk_config,
)

__all__ = (
    "ConfigError",
    "PaymentArgs",
    "PaymentError",
    "PaymentRecord",
    "PaymentStatus",
    "PaymentTransaction",
    "PiNetwork",
    "SdkConfig",
    "SdkEnvironment",
    "build_environment",
    "create_pi_network",
    "load_env_file",
    "load_sdk_config",
    "send_a2u_payment",
)
