"""
Firebase Cloud Messaging integration
=====================================

Public re-exports for the server-key FCM client and APNS token import.
"""

from .apnsRegistration import (
    MAX_APNS_TOKENS_PER_BATCH,
    RegistrationOutcome,
    RegistrationProfile,
    build_batch_import_payload,
    map_batch_import_response,
)
from .errors import (
    BatchSizeExceededError,
    ConfigurationMissingError,
    DecodingError,
    FCMError,
    FCMTransportError,
    RemoteValidationError,
)
from .fcmClient import FCMClient, resolve_server_key

__all__ = [
    "MAX_APNS_TOKENS_PER_BATCH",
    "BatchSizeExceededError",
    "ConfigurationMissingError",
    "DecodingError",
    "FCMClient",
    "FCMError",
    "FCMTransportError",
    "RegistrationOutcome",
    "RegistrationProfile",
    "RemoteValidationError",
    "build_batch_import_payload",
    "map_batch_import_response",
    "resolve_server_key",
]
