"""Typed server-side client for Firebase Cloud Messaging.

Typical usage::

    from fcm_bridge import FCMClient, FCMConfiguration

    client = FCMClient(FCMConfiguration(server_key="AAAA..."))
    outcomes = await client.register_apns(tokens, app_bundle_id="com.example.app")
"""

from fcm_bridge.core.config import FCMConfiguration, Settings
from fcm_bridge.integrations.fcm import (
    MAX_APNS_TOKENS_PER_BATCH,
    BatchSizeExceededError,
    ConfigurationMissingError,
    DecodingError,
    FCMClient,
    FCMError,
    FCMTransportError,
    RegistrationOutcome,
    RegistrationProfile,
    RemoteValidationError,
    resolve_server_key,
)

__all__ = [
    "MAX_APNS_TOKENS_PER_BATCH",
    "BatchSizeExceededError",
    "ConfigurationMissingError",
    "DecodingError",
    "FCMClient",
    "FCMConfiguration",
    "FCMError",
    "FCMTransportError",
    "RegistrationOutcome",
    "RegistrationProfile",
    "RemoteValidationError",
    "Settings",
    "resolve_server_key",
]
