"""GitHub REST client for release notes: issues, pull requests and releases.

Every listing is a single page of up to 100 items; anything beyond the
first page is not fetched.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from models.data_models import CreateReleaseOutcome
from utils.errors import FetchError, PublishError

logger = logging.getLogger(__name__)

PER_PAGE = 100


def response_payload(response: requests.Response) -> Any:
    """Return the decoded JSON body of a response, or its text if not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def format_since(since: datetime) -> str:
    """Format a datetime as the ISO-8601 UTC timestamp GitHub expects."""
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    return since.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class GitHubClient:
    """GitHub API client authenticated as an app installation.
    
    Implements the ReleasePlatform interface.
    """
    
    def __init__(self, auth, base_url: str = "https://api.github.com"):
        """Initialize GitHub API client.
        
        Args:
            auth: GitHubAppAuth providing installation tokens and metadata
            base_url: GitHub REST API base URL
        """
        self.auth = auth
        self.base_url = base_url.rstrip("/")
    
    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.auth.get_installation_token()}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
    
    def _get(self, url: str, params: Optional[dict] = None) -> requests.Response:
        """GET with error wrapping; caller handles status codes.
        
        Raises:
            FetchError: On transport errors
        """
        try:
            response = requests.get(url, headers=self.headers, params=params)
        except requests.RequestException as e:
            logger.error(f"Error requesting {url}: {e}")
            raise FetchError(f"Request to {url} failed: {e}") from e
        
        remaining = response.headers.get("X-RateLimit-Remaining")
        limit = response.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            logger.debug(f"Rate limit: {remaining}/{limit} remaining")
        
        return response
    
    def _check(self, response: requests.Response, what: str) -> None:
        if response.status_code in (401, 403):
            logger.error(
                f"Authentication error: {response.status_code} - "
                f"{response.text[:200]}"
            )
        if response.status_code >= 400:
            raise FetchError(
                f"Failed to fetch {what}: HTTP {response.status_code}",
                response_data=response_payload(response),
            )
    
    def verify_identity(self) -> dict[str, Any]:
        """Fetch installation metadata to confirm the app identity resolves.
        
        Raises:
            AuthError: If the installation cannot be fetched
        """
        return self.auth.get_installation()
    
    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> Optional[dict[str, Any]]:
        """Fetch a release by its tag name.
        
        Returns:
            Raw release object, or None if no release exists for the tag (404)
        
        Raises:
            FetchError: On transport errors or non-404 HTTP errors
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/releases/tags/{tag}"
        response = self._get(url)
        
        if response.status_code == 404:
            logger.debug(f"Release for tag {tag} not found (404)")
            return None
        
        self._check(response, f"release {tag}")
        return response.json()
    
    def list_closed_issues(
        self, owner: str, repo: str, since: Optional[datetime] = None
    ) -> list[dict[str, Any]]:
        """Fetch one page of closed issues.
        
        The issues endpoint also returns pull requests; callers filter them out.
        
        Args:
            owner: Repository owner
            repo: Repository name
            since: Only issues updated at or after this time (server-side filter)
        
        Raises:
            FetchError: On transport or HTTP errors
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/issues"
        params = {"state": "closed", "per_page": PER_PAGE}
        if since is not None:
            params["since"] = format_since(since)
        
        response = self._get(url, params=params)
        self._check(response, f"closed issues for {owner}/{repo}")
        
        issues = response.json()
        logger.debug(f"Fetched {len(issues)} closed issues from {owner}/{repo}")
        return issues
    
    def list_closed_pull_requests(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """Fetch one page of closed pull requests (merged or not).
        
        Raises:
            FetchError: On transport or HTTP errors
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/pulls"
        params = {"state": "closed", "per_page": PER_PAGE}
        
        response = self._get(url, params=params)
        self._check(response, f"closed pull requests for {owner}/{repo}")
        
        prs = response.json()
        logger.debug(f"Fetched {len(prs)} closed PRs from {owner}/{repo}")
        return prs
    
    def create_release(
        self,
        owner: str,
        repo: str,
        tag_name: str,
        name: str,
        body: str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> CreateReleaseOutcome:
        """Attempt to create a release.
        
        Returns:
            CreateReleaseOutcome: "created" on 201, "conflicted" when GitHub
            reports the release already exists (422 already_exists), "failed"
            for anything else, transport errors included.
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/releases"
        payload = {
            "tag_name": tag_name,
            "name": name,
            "body": body,
            "draft": draft,
            "prerelease": prerelease,
        }
        
        try:
            response = requests.post(url, headers=self.headers, json=payload)
        except requests.RequestException as e:
            logger.error(f"Error creating release {tag_name}: {e}")
            return CreateReleaseOutcome(status="failed", message=str(e))
        
        if response.status_code == 201:
            return CreateReleaseOutcome(
                status="created",
                release=response.json(),
                status_code=response.status_code,
            )
        
        data = response_payload(response)
        if response.status_code == 422 and "already_exists" in response.text:
            return CreateReleaseOutcome(
                status="conflicted",
                status_code=response.status_code,
                message=f"Release {tag_name} already exists",
                response_data=data,
            )
        
        return CreateReleaseOutcome(
            status="failed",
            status_code=response.status_code,
            message=f"Failed to create release {tag_name}: HTTP {response.status_code}",
            response_data=data,
        )
    
    def update_release(self, owner: str, repo: str, release_id: int, body: str) -> dict[str, Any]:
        """Replace the body of an existing release, leaving other fields untouched.
        
        Raises:
            PublishError: On transport or HTTP errors
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/releases/{release_id}"
        
        try:
            response = requests.patch(url, headers=self.headers, json={"body": body})
        except requests.RequestException as e:
            raise PublishError(f"Failed to update release {release_id}: {e}") from e
        
        if response.status_code != 200:
            raise PublishError(
                f"Failed to update release {release_id}: HTTP {response.status_code}",
                response_data=response_payload(response),
            )
        
        return response.json()
