"""Configuration loader that reads from .env and validates with Pydantic."""

import os
import sys
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import ValidationError

from models.config_models import AppCredentials, Config, ReleaseSettings


def _repository_from_env() -> tuple[Optional[str], Optional[str]]:
    """Resolve owner/repo from GITHUB_OWNER/GITHUB_REPO or GITHUB_REPOSITORY."""
    owner = os.getenv("GITHUB_OWNER")
    repo = os.getenv("GITHUB_REPO")
    
    # GitHub Actions exposes "owner/repo" as GITHUB_REPOSITORY
    repository = os.getenv("GITHUB_REPOSITORY", "")
    if "/" in repository:
        default_owner, default_repo = repository.split("/", 1)
        owner = owner or default_owner
        repo = repo or default_repo
    
    return owner, repo


def load_config(
    owner: Optional[str] = None,
    repo: Optional[str] = None,
    tag_name: Optional[str] = None,
    previous_tag: Optional[str] = None,
    api_url: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Config:
    """
    Load and validate configuration from environment variables.
    
    Reads from .env file in the project root, then applies any explicit
    overrides (typically CLI arguments) on top of the environment.
    
    Args:
        owner: Repository owner override
        repo: Repository name override
        tag_name: Release tag override
        previous_tag: Previous release tag override
        api_url: GitHub API base URL override
        log_level: Logging level override
    
    Returns:
        Config: Validated configuration object
        
    Raises:
        SystemExit: If configuration is invalid or missing required fields
    """
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)
    
    env_owner, env_repo = _repository_from_env()
    
    try:
        config = Config(
            credentials=AppCredentials(
                app_id=os.getenv("APP_ID"),
                installation_id=os.getenv("INSTALLATION_ID"),
                private_key=os.getenv("APP_PRIVATE_KEY"),
            ),
            release=ReleaseSettings(
                owner=owner or env_owner or "",
                repo=repo or env_repo or "",
                tag_name=tag_name or os.getenv("TAG_NAME") or "v1.0.0",
                previous_tag=previous_tag if previous_tag is not None else os.getenv("PREVIOUS_TAG"),
            ),
            api_url=api_url or os.getenv("GITHUB_API_URL", "https://api.github.com"),
            log_level=log_level or os.getenv("LOG_LEVEL", "INFO"),
        )
        
        return config
        
    except ValidationError as e:
        print("❌ Configuration validation failed:", file=sys.stderr)
        print("\nPlease check your .env file. Missing or invalid fields:", file=sys.stderr)
        
        for error in e.errors():
            field_path = " → ".join(str(x) for x in error["loc"])
            message = error["msg"]
            print(f"  • {field_path}: {message}", file=sys.stderr)
        
        print("\nHint: Copy .env.example to .env and fill in your credentials.", file=sys.stderr)
        sys.exit(1)
