"""
Core primitives that implement the Pi payment lifecycle.
"""

from .client import PiNetwork, classify_error
from .config import ConfigError, SdkConfig, load_sdk_config
from .environment import SdkEnvironment, build_environment, default_env_file, load_env_file
from .errors import ERROR_MESSAGES, UNKNOWN_ERROR, PaymentError
from .ledger import HorizonLedger, LedgerClient, SubmissionResult
from .models import (
    PaymentArgs,
    PaymentRecord,
    PaymentStatus,
    PaymentTransaction,
    TransactionData,
)
from .platform import PlatformApiClient, PlatformApiError
from .transactions import build_a2u_transaction
from .validators import validate_api_key, validate_payment_data, validate_seed_format

__all__ = [
    "ConfigError",
    "ERROR_MESSAGES",
    "HorizonLedger",
    "LedgerClient",
    "PaymentArgs",
    "PaymentError",
    "PaymentRecord",
    "PaymentStatus",
    "PaymentTransaction",
    "PiNetwork",
    "PlatformApiClient",
    "PlatformApiError",
    "SdkConfig",
    "SdkEnvironment",
    "SubmissionResult",
    "TransactionData",
    "UNKNOWN_ERROR",
    "build_a2u_transaction",
    "build_environment",
    "classify_error",
    "default_env_file",
    "load_env_file",
    "load_sdk_config",
    "validate_api_key",
    "validate_payment_data",
    "validate_seed_format",
]
