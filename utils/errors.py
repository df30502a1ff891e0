"""Error taxonomy for the release notes pipeline."""

from typing import Any, Optional


class ReleaseNotesError(Exception):
    """Base error for every fatal pipeline failure.
    
    Carries the raw API response payload (when one exists) so the entry
    point can report it alongside the message.
    """
    
    def __init__(self, message: str, response_data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.response_data = response_data


class ConfigError(ReleaseNotesError):
    """Missing or malformed credentials. Raised before any network call."""


class AuthError(ReleaseNotesError):
    """GitHub App token exchange or identity verification failed."""


class FetchError(ReleaseNotesError):
    """Listing or lookup request failed."""


class PublishError(ReleaseNotesError):
    """Release create/update failed for a reason other than a tag conflict."""
