"""
Core data models API surface for treepull.

This file re-exports model classes from domain-specific modules so callers
can write `from treepull.models import X`.
"""

from .github import (
    EntryType,
    RepositoryCoordinate,
    TreeEntry,
)
from .download import (
    DownloadStatus,
    DownloadTask,
    DownloadResult,
)
from .config import DownloadConfig, TOKEN_ENV_VAR, load_token

__all__ = [
    # GitHub models
    "EntryType",
    "RepositoryCoordinate",
    "TreeEntry",
    # Download models
    "DownloadStatus",
    "DownloadTask",
    "DownloadResult",
    # Config models
    "DownloadConfig",
    "TOKEN_ENV_VAR",
    "load_token",
]
