"""
Services wrapping external collaborators: the GitHub API and the local disk.
"""

from .github_api import GitHubAPIService
from .download import DownloadService

__all__ = [
    "GitHubAPIService",
    "DownloadService",
]
