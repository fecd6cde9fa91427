"""
treepull: download a directory or a single file of a GitHub repository.
"""

from .interfaces.api import TreeDownloader
from .models import DownloadConfig, DownloadResult, RepositoryCoordinate

__version__ = "0.1.0"

__all__ = [
    "TreeDownloader",
    "DownloadConfig",
    "DownloadResult",
    "RepositoryCoordinate",
    "__version__",
]
