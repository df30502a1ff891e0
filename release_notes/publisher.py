"""Create or update the GitHub Release for a tag."""

import logging

from fetchers.base import ReleasePlatform
from models.data_models import Release
from release_notes.renderer import is_prerelease
from utils.errors import FetchError, PublishError

logger = logging.getLogger(__name__)


def publish_release(
    client: ReleasePlatform,
    owner: str,
    repo: str,
    tag_name: str,
    body: str,
) -> Release:
    """Create the release for a tag, or replace the body of the existing one.
    
    When the tag already has a release, only its body is updated; title,
    draft and prerelease flags stay as they are. There is no locking between
    the failed create and the update.
    
    Args:
        client: Platform client
        owner: Repository owner
        repo: Repository name
        tag_name: Release tag
        body: Rendered release notes
    
    Returns:
        The created or updated Release
    
    Raises:
        PublishError: If the create fails for any reason other than an existing
            release, or the existing release cannot be updated
    """
    logger.info(f"🚀 Creating release {tag_name}...")
    outcome = client.create_release(
        owner,
        repo,
        tag_name=tag_name,
        name=f"Release {tag_name}",
        body=body,
        draft=False,
        prerelease=is_prerelease(tag_name),
    )
    
    if outcome.status == "created":
        release = Release.model_validate(outcome.release)
        logger.info("✅ Release created successfully!")
        logger.info(f"🔗 URL: {release.html_url}")
        return release
    
    if outcome.status == "conflicted":
        logger.warning(f"⚠️  Release {tag_name} already exists, updating...")
        try:
            existing = client.get_release_by_tag(owner, repo, tag_name)
        except FetchError as e:
            raise PublishError(
                f"Failed to look up existing release {tag_name}: {e}",
                response_data=e.response_data,
            ) from e
        if existing is None:
            raise PublishError(
                f"Release {tag_name} reported as existing but could not be found",
                response_data=outcome.response_data,
            )
        updated = Release.model_validate(
            client.update_release(owner, repo, existing["id"], body)
        )
        logger.info("✅ Release updated successfully!")
        logger.info(f"🔗 URL: {updated.html_url}")
        return updated
    
    raise PublishError(
        outcome.message or f"Failed to create release {tag_name}",
        response_data=outcome.response_data,
    )
