"""
Firebase Cloud Messaging (FCM) HTTP client
===========================================

Async client for the server-key authenticated FCM endpoints. Every call
goes through ``FCMClient.post``, which resolves the server key, attaches the
``Authorization: key=<server key>`` header, and turns HTTP-level failures
into typed errors. APNS token import is built on top of it; other
server-key operations can reuse the same pathway.

Credentials:
  The server key is resolved per call: an explicit ``server_key`` argument
  wins, then ``FCMConfiguration.server_key``. If neither is available the
  call fails with ``ConfigurationMissingError`` before any request is sent.

Retries:
  None. A failed request raises immediately and the caller decides whether
  to try again.

HTTP client:
  Pass a shared ``httpx.AsyncClient`` to reuse connections; its lifetime
  stays with the caller. Without one, each request opens a short-lived
  client.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from fcm_bridge.core.config import DEFAULT_IID_URL, DEFAULT_REQUEST_TIMEOUT_SECONDS, FCMConfiguration
from fcm_bridge.integrations.fcm.apnsRegistration import (
    BATCH_IMPORT_METHOD,
    RegistrationOutcome,
    RegistrationProfile,
    build_batch_import_payload,
    map_batch_import_response,
)
from fcm_bridge.integrations.fcm.errors import (
    ConfigurationMissingError,
    FCMTransportError,
    RemoteValidationError,
)

logger = logging.getLogger(__name__)


def resolve_server_key(explicit: str | None, configuration: FCMConfiguration | None) -> str:
    """Pick the server key for one call.

    Raises:
        ConfigurationMissingError: If neither *explicit* nor the
            configuration provides a key.
    """
    if explicit is not None:
        return explicit
    if configuration is not None and configuration.server_key:
        return configuration.server_key
    raise ConfigurationMissingError(
        "FCM: Server Key is missing. Pass server_key or set FCMConfiguration.server_key"
    )


class FCMClient:
    """Server-key authenticated FCM client.

    Args:
        configuration: Default credentials and endpoints. May be omitted if
            every call passes ``server_key`` explicitly.
        http_client: Optional shared ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        configuration: FCMConfiguration | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.configuration = configuration
        self._http_client = http_client

    @property
    def _timeout(self) -> float:
        if self.configuration is None:
            return DEFAULT_REQUEST_TIMEOUT_SECONDS
        return self.configuration.request_timeout_seconds

    @property
    def batch_import_url(self) -> str:
        base = self.configuration.iid_url if self.configuration is not None else DEFAULT_IID_URL
        return base + BATCH_IMPORT_METHOD

    # ------------------------------------------------------------------
    # Authenticated pathway
    # ------------------------------------------------------------------

    async def post(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        server_key: str | None = None,
    ) -> httpx.Response:
        """POST *payload* as JSON to *url* with server-key authorization.

        Returns:
            The response, guaranteed to have a 2xx status.

        Raises:
            ConfigurationMissingError: If no server key can be resolved.
            RemoteValidationError: On any non-2xx status.
            FCMTransportError: If no response was received.
        """
        key = resolve_server_key(server_key, self.configuration)
        headers = {
            "Authorization": f"key={key}",
            "Content-Type": "application/json",
        }

        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    url, headers=headers, json=payload, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, headers=headers, json=payload)
        except httpx.TransportError as exc:
            logger.error("FCM request to %s failed: %s", url, exc)
            raise FCMTransportError(f"FCM request to {url} failed: {exc}", raw=str(exc)) from exc

        if not response.is_success:
            logger.error(
                "FCM request to %s rejected: HTTP %d %s",
                url,
                response.status_code,
                response.text,
            )
            raise RemoteValidationError(response.status_code, response.text, url=url)

        return response

    # ------------------------------------------------------------------
    # APNS token import
    # ------------------------------------------------------------------

    async def register_apns(
        self,
        tokens: Sequence[str],
        *,
        app_bundle_id: str,
        server_key: str | None = None,
        sandbox: bool = False,
    ) -> list[RegistrationOutcome]:
        """Register raw APNS tokens with FCM and return Firebase tokens.

        Args:
            tokens: Up to 100 APNS device tokens.
            app_bundle_id: iOS bundle id of the app the tokens belong to.
            server_key: Overrides the configured server key for this call.
            sandbox: True for tokens issued by the APNS sandbox.

        Returns:
            One outcome per entry returned by the service, in service order.
            Empty (and no request made) when *tokens* is empty.

        Raises:
            BatchSizeExceededError: More than 100 tokens.
            ConfigurationMissingError: No server key available.
            RemoteValidationError: Non-2xx response.
            DecodingError: Unexpected response body.
            FCMTransportError: Network failure.
            TypeError: *tokens* is a single string.
        """
        payload = build_batch_import_payload(tokens, app_bundle_id, sandbox)
        if payload is None:
            return []

        logger.info(
            "Importing %d APNS tokens for %r (sandbox=%s)",
            len(tokens),
            app_bundle_id,
            sandbox,
        )

        response = await self.post(self.batch_import_url, payload, server_key=server_key)
        outcomes = map_batch_import_response(response)

        if len(outcomes) != len(tokens):
            logger.warning(
                "APNS batch import returned %d results for %d tokens",
                len(outcomes),
                len(tokens),
            )

        return outcomes

    async def register_apns_for(
        self,
        profile: RegistrationProfile,
        tokens: Sequence[str],
    ) -> list[RegistrationOutcome]:
        """``register_apns`` with bundle id, key and sandbox taken from *profile*."""
        return await self.register_apns(
            tokens,
            app_bundle_id=profile.app_bundle_id,
            server_key=profile.server_key,
            sandbox=profile.sandbox,
        )
