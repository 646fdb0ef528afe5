"""GitHub OAuth service: authorization URL, code exchange and e-mail lookup"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from ...core.config import Settings, settings as default_settings
from ...core.errors import OAuthProviderError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"
USER_EMAILS_URL = "https://api.github.com/user/emails"
SCOPE = "user:email"


class GitHubOAuthService:

    def __init__(self, config: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        config = config or default_settings
        self.client_id = config.GITHUB_CLIENT_ID
        self.client_secret = config.GITHUB_CLIENT_SECRET
        self.callback_url = config.GITHUB_CALLBACK_URL
        self._transport = transport

    def authorization_url(self, state: str) -> str:
        if not self.client_id:
            raise OAuthProviderError("GitHub OAuth is not configured on the server")

        query = urlencode({
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "scope": SCOPE,
            "state": state,
        })
        return f"{AUTHORIZE_URL}?{query}"

    async def fetch_email(self, code: str) -> Optional[str]:
        """Exchange the callback code and return the account's primary verified e-mail"""
        async with httpx.AsyncClient(timeout=30.0, transport=self._transport) as client:
            access_token = await self._exchange_code(client, code)
            return await self._primary_email(client, access_token)

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        try:
            response = await client.post(
                ACCESS_TOKEN_URL,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                    "redirect_uri": self.callback_url,
                },
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise OAuthProviderError(f"GitHub token exchange failed: {e}") from e

        if response.status_code != 200:
            raise OAuthProviderError(f"GitHub token exchange failed: {response.status_code}")

        payload = response.json()
        if "error" in payload or "access_token" not in payload:
            raise OAuthProviderError(
                f"GitHub rejected the code: {payload.get('error_description') or payload.get('error')}"
            )
        return payload["access_token"]

    async def _primary_email(self, client: httpx.AsyncClient, access_token: str) -> Optional[str]:
        try:
            response = await client.get(
                USER_EMAILS_URL,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
            )
        except httpx.HTTPError as e:
            raise OAuthProviderError(f"GitHub e-mail lookup failed: {e}") from e

        if response.status_code != 200:
            raise OAuthProviderError(f"GitHub e-mail lookup failed: {response.status_code}")

        verified = [entry for entry in response.json() if entry.get("verified")]
        for entry in verified:
            if entry.get("primary"):
                return entry["email"]
        if verified:
            return verified[0]["email"]

        logger.warning("GitHub account has no verified e-mail")
        return None
