"""
APNS token import -- Instance ID ``batchImport``
=================================================

Types and pure helpers for exchanging raw APNS device tokens for Firebase
registration tokens. The network call itself lives in ``FCMClient``; this
module only validates the outgoing batch and interprets the reply.

Batch limits:
  The remote API accepts at most ``MAX_APNS_TOKENS_PER_BATCH`` tokens per
  call. Larger batches are rejected, never split, so one call always maps
  to exactly one remote request.

Result interpretation:
  Each entry of the reply's ``results`` array becomes one
  ``RegistrationOutcome`` in the order the service returned it. A token the
  service refused is a normal outcome with ``is_registered=False``, not an
  exception.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from fcm_bridge.core.config import Settings, settings as default_settings
from fcm_bridge.integrations.fcm.errors import (
    BatchSizeExceededError,
    ConfigurationMissingError,
    DecodingError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_APNS_TOKENS_PER_BATCH: int = 100
BATCH_IMPORT_METHOD = "batchImport"
REGISTERED_STATUS = "OK"


# ---------------------------------------------------------------------------
# Public types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegistrationProfile:
    """Named defaults for a registration call.

    Declare one per app and reuse it::

        MY_APP = RegistrationProfile(app_bundle_id="com.example.myapp")
        outcomes = await client.register_apns_for(MY_APP, tokens)
    """

    app_bundle_id: str
    server_key: str | None = None
    sandbox: bool = False

    @classmethod
    def from_env(cls, source: Settings | None = None) -> RegistrationProfile:
        """Profile for the app named by ``FCM_APP_BUNDLE_ID``.

        Raises:
            ConfigurationMissingError: If the bundle id is not set.
        """
        source = source or default_settings
        app_bundle_id = source.fcm_app_bundle_id.strip()
        if not app_bundle_id:
            raise ConfigurationMissingError(
                "FCM: Register APNS: missing FCM_APP_BUNDLE_ID environment variable"
            )
        return cls(app_bundle_id=app_bundle_id)

    @classmethod
    def from_env_sandbox(cls, source: Settings | None = None) -> RegistrationProfile:
        """Same as ``from_env`` but targeting the APNS sandbox."""
        return cls.from_env(source).with_sandbox(True)

    def with_sandbox(self, sandbox: bool) -> RegistrationProfile:
        return replace(self, sandbox=sandbox)


@dataclass(frozen=True)
class RegistrationOutcome:
    """Result of importing one APNS token."""

    registration_token: str
    apns_token: str
    is_registered: bool


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


class _BatchImportResult(BaseModel):
    registration_token: str
    apns_token: str
    status: str


class _BatchImportEnvelope(BaseModel):
    results: list[_BatchImportResult]


# ---------------------------------------------------------------------------
# Request building / response mapping
# ---------------------------------------------------------------------------


def build_batch_import_payload(
    tokens: Sequence[str],
    app_bundle_id: str,
    sandbox: bool = False,
) -> dict[str, Any] | None:
    """Validate *tokens* and build the ``batchImport`` request body.

    Returns:
        The JSON body, or ``None`` when *tokens* is empty and no remote
        call should be made.

    Raises:
        BatchSizeExceededError: If more than ``MAX_APNS_TOKENS_PER_BATCH``
            tokens are given.
        TypeError: If *tokens* is a single string.
    """
    if isinstance(tokens, str):
        raise TypeError("tokens must be a sequence of strings, not a single string")
    if len(tokens) > MAX_APNS_TOKENS_PER_BATCH:
        raise BatchSizeExceededError(len(tokens), MAX_APNS_TOKENS_PER_BATCH)
    if not tokens:
        return None
    return {
        "application": app_bundle_id,
        "sandbox": sandbox,
        "apns_tokens": list(tokens),
    }


def map_batch_import_response(response: httpx.Response) -> list[RegistrationOutcome]:
    """Decode a successful ``batchImport`` reply into outcomes.

    The outcomes follow the order of the reply's ``results`` array. Their
    count is whatever the service returned.

    Raises:
        DecodingError: If the body is not JSON or lacks the expected shape.
    """
    try:
        envelope = _BatchImportEnvelope.model_validate_json(response.content)
    except ValidationError as exc:
        raise DecodingError(
            f"FCM: Register APNS: unexpected response body: {exc.error_count()} error(s)",
            status=str(response.status_code),
            raw=response.text,
        ) from exc

    outcomes = [
        RegistrationOutcome(
            registration_token=item.registration_token,
            apns_token=item.apns_token,
            is_registered=item.status == REGISTERED_STATUS,
        )
        for item in envelope.results
    ]

    rejected = sum(1 for outcome in outcomes if not outcome.is_registered)
    if rejected:
        logger.warning("APNS batch import: %d of %d tokens not registered", rejected, len(outcomes))

    return outcomes
