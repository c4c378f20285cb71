"""
Library configuration loaded from environment variables with sensible
defaults for local development.

``Settings`` is the environment bootstrap (validated by Pydantic
``BaseSettings``). ``FCMConfiguration`` is the object actually handed to
``FCMClient``; hosts may build it by hand or derive it from settings.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from firebase_admin import credentials
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_IID_URL = "https://iid.googleapis.com/iid/v1:"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0


class Settings(BaseSettings):
    """Environment-backed configuration for the FCM client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Legacy server key (Instance ID API) --
    fcm_server_key: str = ""
    fcm_app_bundle_id: str = ""
    fcm_iid_url: str = DEFAULT_IID_URL
    fcm_request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    # -- Service account (HTTP v1 sibling operations) --
    firebase_service_account_path: str = ""
    firebase_credentials_json: str = ""


settings = Settings()


def load_service_account(source: Settings) -> credentials.Certificate | None:
    """Load service-account credentials named by *source*, if any.

    The file path takes precedence over the raw JSON string.
    """
    if source.firebase_service_account_path:
        logger.info(
            "Loading Firebase service account from file: %s",
            source.firebase_service_account_path,
        )
        return credentials.Certificate(source.firebase_service_account_path)
    if source.firebase_credentials_json:
        logger.info("Loading Firebase service account from JSON setting")
        return credentials.Certificate(json.loads(source.firebase_credentials_json))
    return None


@dataclass(frozen=True)
class FCMConfiguration:
    """Credentials and endpoints shared by every call of one ``FCMClient``.

    Attributes:
        server_key: Default legacy server key, sent as ``key=<server_key>``.
        service_account: Opaque service-account credentials kept for
            sibling operations; never read by the batch import path.
        iid_url: Base URL of the Instance ID API, ending in ``v1:``.
        request_timeout_seconds: Per-request timeout for the HTTP client.
    """

    server_key: str | None = None
    service_account: Any = None
    iid_url: str = DEFAULT_IID_URL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @classmethod
    def from_settings(
        cls,
        source: Settings | None = None,
        *,
        with_service_account: bool = False,
    ) -> FCMConfiguration:
        source = source or settings
        return cls(
            server_key=source.fcm_server_key.strip() or None,
            service_account=load_service_account(source) if with_service_account else None,
            iid_url=source.fcm_iid_url,
            request_timeout_seconds=source.fcm_request_timeout_seconds,
        )
