"""
Python API for treepull.

Example:
    with TreeDownloader(auth_token=token) as downloader:
        result = downloader.download("golang", "go", path="src/sort", destination="out")
"""

import logging
from typing import Optional

from ..models import DownloadConfig, DownloadResult, RepositoryCoordinate
from ..services import GitHubAPIService, DownloadService
from ..services.github_api import DEFAULT_API_URL
from ..core import TreeResolver, Fetcher, DownloadOrchestrator
from ..infrastructure.logger import logger


class TreeDownloader:
    """
    Programmatic entry point wiring the services and the pipeline together.
    """

    def __init__(
        self,
        auth_token: str,
        verbose: bool = False,
        api_url: str = DEFAULT_API_URL,
        chunk_size: int = 8192
    ):
        """
        Args:
            auth_token: GitHub token used for the listing and every download
            verbose: Log at DEBUG level when True
            api_url: Base URL of the GitHub REST API
            chunk_size: Bytes read per chunk while streaming file bodies
        """
        self.auth_token = auth_token
        self.verbose = verbose
        self.chunk_size = chunk_size

        self._configure_logging()

        self.github_service = GitHubAPIService(auth_token, api_url=api_url)
        self.download_service = DownloadService()
        self.orchestrator = DownloadOrchestrator(
            TreeResolver(self.github_service),
            Fetcher(self.github_service, self.download_service, chunk_size=chunk_size)
        )

    def _configure_logging(self) -> None:
        logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)
        if self.verbose:
            logger.debug("Verbose logging enabled")

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose
        self._configure_logging()

    def download(
        self,
        owner: str,
        repo: str,
        branch: str = "master",
        path: str = "",
        destination: str = "",
        dry_run: bool = False
    ) -> DownloadResult:
        """
        Download ``path`` (or the whole repository) of ``owner/repo@branch``.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Branch to list
            path: Directory or file inside the repository, empty for everything
            destination: Local directory, empty for the current directory
            dry_run: Only resolve the file list

        Returns:
            DownloadResult of the run

        Raises:
            TreepullError: On the first failure
        """
        config = DownloadConfig(
            coordinate=RepositoryCoordinate(owner=owner, name=repo, branch=branch),
            token=self.auth_token,
            scope=path,
            destination=destination,
            chunk_size=self.chunk_size,
            dry_run=dry_run,
            verbose=self.verbose
        )
        return self.execute(config)

    def execute(self, config: DownloadConfig) -> DownloadResult:
        return self.orchestrator.execute(config)

    @property
    def last_result(self) -> Optional[DownloadResult]:
        return self.orchestrator.last_result

    def close(self) -> None:
        self.github_service.close()

    def __enter__(self) -> "TreeDownloader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["TreeDownloader"]
