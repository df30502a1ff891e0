"""GitHub App authentication.

Signs an app JWT with the app's private key and exchanges it for an
installation access token, the same flow the GitHub App docs describe:
https://docs.github.com/en/apps/creating-github-apps/authenticating-with-a-github-app
"""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
import requests

from fetchers.github import GitHubClient, response_payload
from utils.errors import AuthError

logger = logging.getLogger(__name__)

# GitHub rejects app JWTs that live longer than 10 minutes
JWT_LIFETIME_SECONDS = 540
JWT_CLOCK_SKEW_SECONDS = 60

# Refresh the installation token this long before GitHub expires it
TOKEN_REFRESH_MARGIN = timedelta(minutes=5)


class GitHubAppAuth:
    """Issue app JWTs and installation tokens for one installation."""
    
    def __init__(
        self,
        app_id: str,
        private_key: str,
        installation_id: str,
        base_url: str = "https://api.github.com",
    ):
        """Initialize GitHub App auth.
        
        Args:
            app_id: GitHub App ID (JWT issuer)
            private_key: Normalized PEM private key
            installation_id: Installation to request tokens for
            base_url: GitHub REST API base URL
        """
        self.app_id = app_id
        self.private_key = private_key
        self.installation_id = installation_id
        self.base_url = base_url.rstrip("/")
        self._token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None
    
    def create_jwt(self) -> str:
        """Create a short-lived RS256 JWT identifying the app.
        
        Raises:
            AuthError: If the key cannot be used for signing
        """
        now = int(time.time())
        payload = {
            "iat": now - JWT_CLOCK_SKEW_SECONDS,
            "exp": now + JWT_LIFETIME_SECONDS,
            "iss": str(self.app_id),
        }
        try:
            return jwt.encode(payload, self.private_key, algorithm="RS256")
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            raise AuthError(f"Failed to sign GitHub App JWT: {e}") from e
    
    def _app_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.create_jwt()}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
    
    def get_installation(self) -> dict[str, Any]:
        """Fetch installation metadata using the app JWT.
        
        Returns:
            Raw installation object (includes "account" with "login")
        
        Raises:
            AuthError: On transport errors or non-2xx responses
        """
        url = f"{self.base_url}/app/installations/{self.installation_id}"
        try:
            response = requests.get(url, headers=self._app_headers())
        except requests.RequestException as e:
            raise AuthError(f"Failed to fetch installation {self.installation_id}: {e}") from e
        
        if response.status_code != 200:
            logger.error(
                f"Installation lookup failed: {response.status_code} - "
                f"{response.text[:200]}"
            )
            raise AuthError(
                f"Failed to fetch installation {self.installation_id}: HTTP {response.status_code}",
                response_data=response_payload(response),
            )
        
        return response.json()
    
    def get_installation_token(self) -> str:
        """Return an installation access token, exchanging a new one when needed.
        
        Raises:
            AuthError: If the token exchange fails
        """
        now = datetime.now(timezone.utc)
        if self._token and self._token_expires_at and now < self._token_expires_at - TOKEN_REFRESH_MARGIN:
            return self._token
        
        url = f"{self.base_url}/app/installations/{self.installation_id}/access_tokens"
        try:
            response = requests.post(url, headers=self._app_headers())
        except requests.RequestException as e:
            raise AuthError(f"Failed to create installation token: {e}") from e
        
        if response.status_code != 201:
            logger.error(
                f"Installation token exchange failed: {response.status_code} - "
                f"{response.text[:200]}"
            )
            raise AuthError(
                f"Failed to create installation token: HTTP {response.status_code}",
                response_data=response_payload(response),
            )
        
        data = response.json()
        self._token = data["token"]
        expires_at = data.get("expires_at")
        if expires_at:
            self._token_expires_at = datetime.fromisoformat(expires_at.replace("Z", "+00:00"))
        else:
            self._token_expires_at = now + timedelta(hours=1)
        
        logger.debug(f"Installation token valid until {self._token_expires_at.isoformat()}")
        return self._token


def authenticate(
    app_id: str,
    private_key: str,
    installation_id: str,
    base_url: str = "https://api.github.com",
) -> GitHubClient:
    """Authenticate as a GitHub App installation and verify the identity.
    
    Args:
        app_id: GitHub App ID
        private_key: Normalized PEM private key
        installation_id: Installation ID
        base_url: GitHub REST API base URL
    
    Returns:
        GitHubClient authenticated with the installation
    
    Raises:
        AuthError: If signing, the token exchange or verification fails
    """
    logger.info("🔐 Authenticating with GitHub App...")
    logger.info(f"   App ID: {app_id}")
    logger.info(f"   Installation ID: {installation_id}")
    
    auth = GitHubAppAuth(app_id, private_key, installation_id, base_url=base_url)
    client = GitHubClient(auth, base_url=base_url)
    
    installation = client.verify_identity()
    account = installation.get("account") or {}
    logger.info(f"✅ Authenticated as: {account.get('login', 'unknown')}")
    
    return client
