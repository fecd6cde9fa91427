"""
Core download pipeline: tree resolution, fetching and orchestration.
"""

from .resolver import TreeResolver
from .fetcher import Fetcher
from .orchestrator import DownloadOrchestrator

__all__ = [
    "TreeResolver",
    "Fetcher",
    "DownloadOrchestrator",
]
