"""
Download domain models for treepull.

This module contains data classes and enums representing the tasks produced
by the resolver and the result of a complete run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .github import RepositoryCoordinate


class DownloadStatus(Enum):
    """Status enumeration for download operations."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class DownloadTask:
    """One file to fetch: where it lives in the repo and where to get it."""

    relative_path: str
    source_url: str

    def __post_init__(self) -> None:
        if not self.relative_path or not self.source_url:
            raise ValueError("Task path and source URL are required")


@dataclass
class DownloadResult:
    """Outcome of a run, successful or not."""

    coordinate: RepositoryCoordinate
    scope: str = ""
    status: DownloadStatus = DownloadStatus.PENDING

    matched_files: List[str] = field(default_factory=list)
    downloaded_files: List[str] = field(default_factory=list)
    total_bytes: int = 0

    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    failed_file: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.status == DownloadStatus.COMPLETED

    @property
    def duration_seconds(self) -> float:
        if not self.completed_at:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def record_file(self, path: str, bytes_written: int) -> None:
        self.downloaded_files.append(path)
        self.total_bytes += bytes_written

    def mark_completed(self) -> None:
        self.completed_at = datetime.now()
        self.status = DownloadStatus.COMPLETED

    def mark_failed(self, path: Optional[str], error: Exception) -> None:
        self.completed_at = datetime.now()
        self.status = DownloadStatus.FAILED
        self.failed_file = path
        self.error_message = str(error)


__all__ = [
    "DownloadStatus",
    "DownloadTask",
    "DownloadResult",
]
