#!/usr/bin/env python3
"""
Release Notes Generator - Main CLI entrypoint

Authenticates as a GitHub App installation, collects the issues and pull
requests closed since the previous release, renders markdown release notes
and creates (or updates) the GitHub Release for the tag.

Usage:
    python main.py                                   # everything from .env / environment
    python main.py --tag v1.2.0 --previous-tag v1.1.0
    python main.py --owner octo-org --repo widgets --tag v2.0.0-rc1
"""

import argparse
import sys
from datetime import date
from typing import Optional

from fetchers.base import ReleasePlatform
from fetchers.github_app_auth import authenticate
from models.config_models import Config
from release_notes.collector import collect_changes
from release_notes.publisher import publish_release
from release_notes.renderer import render_release_notes
from utils.config_loader import load_config
from utils.errors import ReleaseNotesError
from utils.logger import setup_logger
from utils.private_key import normalize_private_key

logger = setup_logger(name=__name__)


def generate_release_notes(
    config: Config,
    client: Optional[ReleasePlatform] = None,
    today: Optional[date] = None,
) -> int:
    """
    Run the release notes pipeline once.
    
    Stages: normalize the private key, authenticate, collect changes,
    render the notes, publish the release.
    
    Args:
        config: Validated configuration
        client: Platform client (optional; when given, key normalization and
                authentication are skipped)
        today: Release date shown in the notes (defaults to today)
    
    Returns:
        int: 0 on success, 1 on failure
    """
    release = config.release
    
    try:
        logger.info("🚀 Starting Release Notes Generator")
        logger.info(f"📦 Repository: {release.owner}/{release.repo}")
        logger.info(f"🏷️  Tag: {release.tag_name}")
        
        if client is None:
            credentials = config.credentials
            private_key = normalize_private_key(
                credentials.app_id,
                credentials.installation_id,
                credentials.private_key,
            )
            client = authenticate(
                credentials.app_id,
                private_key,
                credentials.installation_id,
                base_url=config.api_url,
            )
        
        changes = collect_changes(
            client,
            release.owner,
            release.repo,
            release.tag_name,
            previous_tag=release.previous_tag,
        )
        
        logger.info("📝 Generating release notes...")
        notes = render_release_notes(
            changes.issues,
            changes.merged_pull_requests,
            release.tag_name,
            previous_tag=release.previous_tag,
            today=today,
        )
        
        logger.info("\n📄 Generated Release Notes:")
        logger.info("─" * 80)
        logger.info(notes)
        logger.info("─" * 80)
        
        publish_release(client, release.owner, release.repo, release.tag_name, notes)
        
        logger.info("\n✅ Release notes generation complete!")
        return 0
    
    except Exception as e:
        logger.error(f"\n❌ Error: {e}")
        if isinstance(e, ReleaseNotesError) and e.response_data is not None:
            logger.error(f"Response: {e.response_data}")
        logger.error("\nStack trace:", exc_info=True)
        return 1


def main():
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Generate GitHub release notes as a GitHub App",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Credentials come from the environment (or .env):
  APP_ID, INSTALLATION_ID, APP_PRIVATE_KEY (PEM or base64-encoded PEM)

Examples:
  # Release v1.2.0 with changes since v1.1.0
  python main.py --tag v1.2.0 --previous-tag v1.1.0

  # Tags containing alpha/beta/rc are published as prereleases
  python main.py --tag v2.0.0-rc1
        """
    )
    parser.add_argument("--owner", help="Repository owner (default: GITHUB_OWNER)")
    parser.add_argument("--repo", help="Repository name (default: GITHUB_REPO)")
    parser.add_argument("--tag", dest="tag_name", help="Release tag (default: TAG_NAME or v1.0.0)")
    parser.add_argument("--previous-tag", help="Previous release tag (default: PREVIOUS_TAG)")
    parser.add_argument("--api-url", help="GitHub API base URL (default: GITHUB_API_URL)")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")
    
    args = parser.parse_args()
    
    config = load_config(
        owner=args.owner,
        repo=args.repo,
        tag_name=args.tag_name,
        previous_tag=args.previous_tag,
        api_url=args.api_url,
        log_level=args.log_level,
    )
    setup_logger(config.log_level, name=__name__)
    
    sys.exit(generate_release_notes(config))


if __name__ == "__main__":
    main()
