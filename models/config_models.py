"""Configuration models for validation using Pydantic."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class AppCredentials(BaseModel):
    """GitHub App credentials loaded from environment variables.
    
    Presence is checked by the private key normalizer rather than here, so a
    missing credential surfaces as a ConfigError from the pipeline.
    """
    
    app_id: Optional[str] = Field(None, description="GitHub App ID")
    installation_id: Optional[str] = Field(None, description="Installation ID of the app on the target account")
    private_key: Optional[str] = Field(None, repr=False, description="PEM or base64-encoded PEM private key")


class ReleaseSettings(BaseModel):
    """Target repository and tags for the release."""
    
    owner: str = Field(..., min_length=1, description="Repository owner (user or organization)")
    repo: str = Field(..., min_length=1, description="Repository name")
    tag_name: str = Field(default="v1.0.0", min_length=1, description="Tag to create or update the release for")
    previous_tag: Optional[str] = Field(None, description="Tag of the previous release, used as the 'since' bound")
    
    @field_validator("previous_tag")
    @classmethod
    def blank_previous_tag_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty PREVIOUS_TAG as not set."""
        if v is None or not v.strip():
            return None
        return v.strip()


class Config(BaseModel):
    """Application configuration."""
    
    credentials: AppCredentials
    release: ReleaseSettings
    api_url: str = Field(default="https://api.github.com", description="GitHub REST API base URL")
    log_level: str = Field(default="INFO", description="Logging level")
    
    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate API URL and strip any trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("GitHub API URL must start with https:// or http://")
        return v.rstrip("/")
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper
