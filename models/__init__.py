"""Data models for the release notes generator."""

from models.config_models import AppCredentials, Config, ReleaseSettings
from models.data_models import (
    ClassifiedChanges,
    CollectedChanges,
    CreateReleaseOutcome,
    Release,
    ReleaseItem,
)

__all__ = [
    "AppCredentials",
    "Config",
    "ReleaseSettings",
    "ClassifiedChanges",
    "CollectedChanges",
    "CreateReleaseOutcome",
    "Release",
    "ReleaseItem",
]
