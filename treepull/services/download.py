"""
Local filesystem side of a download: paths, directories and the byte copy.
"""

import os
from typing import BinaryIO, Iterable

import httpx

from ..infrastructure.error_handler import FilesystemError, TransportError


DIRECTORY_MODE = 0o755


class DownloadService:
    """Writes streamed content to disk."""

    @staticmethod
    def local_path(destination_root: str, relative_path: str) -> str:
        """
        Map a slash-separated repository path under ``destination_root``.

        An empty root means the current directory.
        """
        return os.path.join(destination_root, *relative_path.split("/"))

    @staticmethod
    def ensure_parent_directory(path: str) -> None:
        """Create every missing parent directory of ``path``."""

        parent = os.path.dirname(path)
        if not parent:
            return
        try:
            os.makedirs(parent, mode=DIRECTORY_MODE, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Failed to create directory {parent}", e) from e

    @staticmethod
    def open_target(path: str) -> BinaryIO:
        """Open ``path`` for writing, creating or truncating it."""

        try:
            return open(path, "wb")
        except OSError as e:
            raise FilesystemError(f"Failed to open {path} for writing", e) from e

    @staticmethod
    def copy_stream(chunks: Iterable[bytes], target: BinaryIO, description: str) -> int:
        """
        Copy every chunk into ``target``.

        Args:
            chunks: Response body iterator
            target: Open binary file
            description: Path used in error messages

        Returns:
            Number of bytes written

        Raises:
            TransportError: If reading the body fails
            FilesystemError: If writing the file fails
        """
        written = 0
        iterator = iter(chunks)
        while True:
            try:
                chunk = next(iterator, None)
            except (httpx.HTTPError, httpx.StreamError) as e:
                raise TransportError(f"Failed to read content of {description}", e) from e
            if chunk is None:
                break
            try:
                target.write(chunk)
            except OSError as e:
                raise FilesystemError(f"Failed to write {description}", e) from e
            written += len(chunk)
        return written


__all__ = [
    "DIRECTORY_MODE",
    "DownloadService",
]
