from urllib.parse import urlencode

import requests
from aws_lambda_powertools import Logger

from services.shared.config import get_secret
from services.shared.domain.exception import AuthenticationException
from services.user.domain.factory import GoogleProfile

logger = Logger(child=True)

AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = "openid email profile"
DEFAULT_TIMEOUT_SECONDS = 10


class GoogleOAuthClient:
    """Authorization-code flow against Google's OpenID Connect endpoints"""

    def __init__(self, redirect_uri: str, timeout: int = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._redirect_uri = redirect_uri
        self._timeout = timeout

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": get_secret("GOOGLE_CLIENT_ID"),
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": SCOPES,
            "state": state,
            "prompt": "select_account",
        }
        return f"{AUTHORIZATION_URL}?{urlencode(params)}"

    def fetch_profile(self, code: str) -> GoogleProfile:
        """Exchange the authorization code and read the user's profile"""
        try:
            token_response = requests.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "client_id": get_secret("GOOGLE_CLIENT_ID"),
                    "client_secret": get_secret("GOOGLE_CLIENT_SECRET"),
                    "redirect_uri": self._redirect_uri,
                    "grant_type": "authorization_code",
                },
                timeout=self._timeout,
            )
            token_response.raise_for_status()
            access_token = token_response.json()["access_token"]

            userinfo_response = requests.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self._timeout,
            )
            userinfo_response.raise_for_status()
            userinfo = userinfo_response.json()
        except (requests.RequestException, KeyError) as e:
            logger.warning("Google sign-in failed", extra={"error": str(e)})
            raise AuthenticationException("Google sign-in failed") from e

        if not userinfo.get("sub") or not userinfo.get("email"):
            raise AuthenticationException("Google account has no e-mail address")
        return GoogleProfile(
            google_id=userinfo["sub"],
            email=userinfo["email"],
            name=userinfo.get("name") or "",
            picture=userinfo.get("picture"),
            email_verified=userinfo.get("email_verified") in (True, "true"),
        )
