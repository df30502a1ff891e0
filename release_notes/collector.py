"""Collect closed issues and merged pull requests for a release."""

import logging
from datetime import datetime
from typing import Optional

from fetchers.base import ReleasePlatform
from models.data_models import CollectedChanges, Release, ReleaseItem
from utils.errors import FetchError

logger = logging.getLogger(__name__)


def resolve_since(
    client: ReleasePlatform,
    owner: str,
    repo: str,
    previous_tag: Optional[str],
) -> Optional[datetime]:
    """Return the publish time of the previous tag's release, if it resolves.
    
    A missing release is not an error: the run continues unfiltered.
    """
    if not previous_tag:
        return None
    
    try:
        data = client.get_release_by_tag(owner, repo, previous_tag)
    except FetchError as e:
        logger.warning(f"⚠️  Could not look up previous tag {previous_tag}: {e}")
        data = None
    
    if data is None:
        logger.warning(f"⚠️  Previous tag {previous_tag} not found, including all items")
        return None
    
    previous_release = Release.model_validate(data)
    if previous_release.published_at is None:
        logger.warning(f"⚠️  Previous release {previous_tag} is not published, including all items")
        return None
    
    logger.info(f"📅 Filtering changes since: {previous_release.published_at.isoformat()}")
    return previous_release.published_at


def collect_changes(
    client: ReleasePlatform,
    owner: str,
    repo: str,
    tag_name: str,
    previous_tag: Optional[str] = None,
) -> CollectedChanges:
    """Fetch closed issues and merged pull requests since the previous release.
    
    Issues are date-bounded by the API; pull requests are filtered here on
    merged_at, because the pulls endpoint has no "since" parameter.
    
    Args:
        client: Platform client
        owner: Repository owner
        repo: Repository name
        tag_name: Tag the release is being generated for
        previous_tag: Tag of the previous release (optional)
    
    Returns:
        CollectedChanges with the "since" bound actually applied
    
    Raises:
        FetchError: If either listing fails
    """
    logger.info(f"Collecting changes for {owner}/{repo} {tag_name}")
    since = resolve_since(client, owner, repo, previous_tag)
    
    logger.info("🔍 Fetching closed issues...")
    raw_issues = client.list_closed_issues(owner, repo, since=since)
    issues = [
        item for item in (ReleaseItem.from_api(raw) for raw in raw_issues)
        if not item.is_pull_request
    ]
    logger.info(f"📋 Found {len(issues)} closed issues")
    
    logger.info("🔍 Fetching merged pull requests...")
    raw_prs = client.list_closed_pull_requests(owner, repo)
    merged = [
        pr for pr in (ReleaseItem.from_api(raw) for raw in raw_prs)
        if pr.merged_at is not None and (since is None or pr.merged_at > since)
    ]
    logger.info(f"🔀 Found {len(merged)} merged pull requests")
    
    return CollectedChanges(since=since, issues=issues, merged_pull_requests=merged)
