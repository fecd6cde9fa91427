"""
Downloads a single task to its place under the destination directory.
"""

from ..models import DownloadTask
from ..services import GitHubAPIService, DownloadService
from ..infrastructure.error_handler import (
    FilesystemError, TransportError, closing_resource
)
from ..infrastructure.logger import logger


class Fetcher:
    """Streams one raw file body into one local file."""

    def __init__(
        self,
        github_service: GitHubAPIService,
        download_service: DownloadService,
        chunk_size: int = 8192
    ):
        self.github_service = github_service
        self.download_service = download_service
        self.chunk_size = chunk_size

    def download(self, task: DownloadTask, destination_root: str) -> int:
        """
        Fetch ``task.source_url`` and write it to
        ``destination_root/task.relative_path``, replacing any existing file.

        The response body and the file are closed on every exit path; a
        failure to close either is combined with whatever error was already
        propagating.

        Returns:
            Number of bytes written

        Raises:
            TransportError: On connection failure, non-2xx status or a broken body
            FilesystemError: If the directory or file cannot be created or written
        """
        target_path = self.download_service.local_path(destination_root, task.relative_path)
        response = self.github_service.open_raw_stream(task.source_url)

        with closing_resource(response, TransportError, f"response body of {task.relative_path}"):
            self.github_service.check_response(response)
            self.download_service.ensure_parent_directory(target_path)

            handle = self.download_service.open_target(target_path)
            with closing_resource(handle, FilesystemError, target_path):
                written = self.download_service.copy_stream(
                    response.iter_bytes(chunk_size=self.chunk_size),
                    handle,
                    task.relative_path
                )

        logger.debug(f"Downloaded {task.relative_path} ({written} bytes)")
        return written


__all__ = ["Fetcher"]
