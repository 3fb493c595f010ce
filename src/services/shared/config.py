"""
Centralized configuration for the airline ticketing services.

Plain settings come from environment variables set by the CDK stack.
Credentials live in a single JSON secret in AWS Secrets Manager
(``APP_SECRET_ARN``); for local runs and tests each key may be given as an
environment variable of the same name instead.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3

from services.shared.domain.exception import ConfigurationException

DEFAULT_BOOKING_HOLD_MINUTES = 15
DEFAULT_SESSION_TTL_SECONDS = 60 * 60 * 24  # 1 day
DEFAULT_ACCESS_TOKEN_TTL_MINUTES = 60 * 24
DEFAULT_XENDIT_API_URL = "https://api.xendit.co"


def _parse_origins(raw: str) -> tuple[str, ...]:
    origins = (url.strip().rstrip("/") for url in raw.split(","))
    return tuple(origin for origin in origins if origin)


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the Lambda environment"""

    table_name: str
    app_env: str
    client_urls: tuple[str, ...]
    server_url: str
    default_currency: str
    booking_hold_minutes: int
    session_ttl_seconds: int
    access_token_ttl_minutes: int
    xendit_api_url: str

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def client_url(self) -> str:
        """Primary frontend URL used for redirects"""
        return self.client_urls[0] if self.client_urls else ""

    @property
    def google_callback_url(self) -> str:
        return f"{self.server_url.rstrip('/')}/users/google/callback"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            table_name=os.getenv("TABLE_NAME", ""),
            app_env=os.getenv("APP_ENV", "development"),
            client_urls=_parse_origins(os.getenv("CLIENT_URLS", "")),
            server_url=os.getenv("SERVER_URL", ""),
            default_currency=os.getenv("DEFAULT_CURRENCY", "PHP"),
            booking_hold_minutes=int(
                os.getenv("BOOKING_HOLD_MINUTES", DEFAULT_BOOKING_HOLD_MINUTES)
            ),
            session_ttl_seconds=int(
                os.getenv("SESSION_TTL_SECONDS", DEFAULT_SESSION_TTL_SECONDS)
            ),
            access_token_ttl_minutes=int(
                os.getenv("ACCESS_TOKEN_TTL_MINUTES", DEFAULT_ACCESS_TOKEN_TTL_MINUTES)
            ),
            xendit_api_url=os.getenv("XENDIT_API_URL", DEFAULT_XENDIT_API_URL),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


_secret_cache: dict[str, str] | None = None


def _load_secret_bundle() -> dict[str, str]:
    global _secret_cache
    if _secret_cache is None:
        client = boto3.client("secretsmanager")
        response = client.get_secret_value(SecretId=os.environ["APP_SECRET_ARN"])
        _secret_cache = json.loads(response["SecretString"])
    return _secret_cache


def get_secret(name: str) -> str:
    """Resolve a credential by key (e.g. ``STRIPE_SECRET_KEY``)"""
    if os.getenv("APP_SECRET_ARN"):
        value = _load_secret_bundle().get(name)
    else:
        value = os.getenv(name)
    if not value:
        raise ConfigurationException(f"Secret is not configured: {name}")
    return value
