"""Data models for GitHub issues, pull requests and releases."""

from datetime import datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field


def _login(user: Optional[dict[str, Any]]) -> Optional[str]:
    if not user:
        return None
    return user.get("login")


class ReleaseItem(BaseModel):
    """A closed issue or pull request as it appears in the release notes."""
    
    number: int
    title: str
    labels: list[str] = Field(default_factory=list)
    author: Optional[str] = None
    closed_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None
    closed_by: Optional[str] = None
    
    # The issues endpoint also lists pull requests; they carry a "pull_request" key
    is_pull_request: bool = False
    
    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ReleaseItem":
        """Build from a raw GitHub issue or pull request object."""
        labels = [
            label["name"] if isinstance(label, dict) else str(label)
            for label in data.get("labels") or []
        ]
        return cls(
            number=data["number"],
            title=data["title"],
            labels=labels,
            author=_login(data.get("user")),
            closed_at=data.get("closed_at"),
            merged_at=data.get("merged_at"),
            closed_by=_login(data.get("closed_by")),
            is_pull_request=bool(data.get("pull_request")),
        )


class Release(BaseModel):
    """GitHub Release record."""
    
    id: int
    tag_name: str
    name: Optional[str] = None
    body: Optional[str] = None
    html_url: str
    draft: bool = False
    prerelease: bool = False
    published_at: Optional[datetime] = None


class CollectedChanges(BaseModel):
    """Closed issues and merged pull requests gathered for one release."""
    
    since: Optional[datetime] = None
    issues: list[ReleaseItem] = Field(default_factory=list)
    merged_pull_requests: list[ReleaseItem] = Field(default_factory=list)


class ClassifiedChanges(BaseModel):
    """Release items grouped into the sections of the release notes.
    
    Every closed issue lands in exactly one of features, bug_fixes or other.
    """
    
    features: list[ReleaseItem] = Field(default_factory=list)
    bug_fixes: list[ReleaseItem] = Field(default_factory=list)
    other: list[ReleaseItem] = Field(default_factory=list)
    merged_pull_requests: list[ReleaseItem] = Field(default_factory=list)
    contributors: list[str] = Field(default_factory=list)


class CreateReleaseOutcome(BaseModel):
    """Result of a create-release attempt.
    
    - created: release dict is set
    - conflicted: a release for the tag already exists
    - failed: any other error; status_code/response_data describe it
    """
    
    status: Literal["created", "conflicted", "failed"]
    release: Optional[dict[str, Any]] = None
    status_code: Optional[int] = None
    message: Optional[str] = None
    response_data: Optional[Any] = None
