"""Interface the release notes pipeline needs from a hosting platform."""

from datetime import datetime
from typing import Any, Optional, Protocol

from models.data_models import CreateReleaseOutcome


class ReleasePlatform(Protocol):
    """Platform API operations used by the collector and publisher.
    
    GitHubClient is the real implementation; tests pass in-memory fakes.
    """
    
    def verify_identity(self) -> dict[str, Any]:
        ...
    
    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> Optional[dict[str, Any]]:
        ...
    
    def list_closed_issues(
        self, owner: str, repo: str, since: Optional[datetime] = None
    ) -> list[dict[str, Any]]:
        ...
    
    def list_closed_pull_requests(self, owner: str, repo: str) -> list[dict[str, Any]]:
        ...
    
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
        ...
    
    def update_release(self, owner: str, repo: str, release_id: int, body: str) -> dict[str, Any]:
        ...
