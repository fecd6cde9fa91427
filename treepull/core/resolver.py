"""
Turns a repository tree listing into the ordered list of files to download.
"""

from typing import List, Optional, Tuple

from ..models import DownloadTask, RepositoryCoordinate, TreeEntry
from ..services import GitHubAPIService
from ..infrastructure.error_handler import NotFoundError
from ..infrastructure.logger import logger


class TreeResolver:
    """
    Selects the blobs of a repository tree that fall under a scope.

    An empty scope selects every blob. A scope naming a directory selects
    the blobs below it; a scope naming a file selects that file alone.
    """

    def __init__(self, github_service: GitHubAPIService):
        self.github_service = github_service

    def resolve(
        self,
        coordinate: RepositoryCoordinate,
        scope: str = ""
    ) -> Tuple[DownloadTask, ...]:
        """
        List the tree once and build the download tasks.

        Args:
            coordinate: Repository and branch to list
            scope: Optional path inside the tree

        Returns:
            Tasks in listing order

        Raises:
            TransportError: If the listing call fails
            NotFoundError: If ``scope`` matches no entry
        """
        entries = self.github_service.get_repository_tree(coordinate)
        scope = scope.rstrip("/")

        anchor = self.find_entry(entries, scope) if scope else None
        if scope and anchor is None:
            raise NotFoundError(scope)

        tasks = tuple(
            DownloadTask(
                relative_path=entry.path,
                source_url=self.github_service.raw_url(coordinate, entry.path)
            )
            for entry in entries
            if entry.is_blob and self.in_scope(entry.path, anchor)
        )

        logger.debug(
            f"Selected {len(tasks)}/{len(entries)} entries of {coordinate}"
            + (f" under '{scope}'" if scope else "")
        )
        return tasks

    @staticmethod
    def find_entry(entries: List[TreeEntry], path: str) -> Optional[TreeEntry]:
        """Return the first entry whose path is exactly ``path``, ignoring a trailing slash."""

        for entry in entries:
            if entry.path.rstrip("/") == path:
                return entry
        return None

    @staticmethod
    def in_scope(path: str, anchor: Optional[TreeEntry]) -> bool:
        """
        Decide whether a blob path falls under the scope entry.

        Directory scopes match on ``anchor.path + "/"`` so that a sibling
        sharing a name prefix (``src`` vs ``src2/x``) is not selected. File
        scopes match only the file itself (``a`` never selects ``a2.txt``).
        """
        if anchor is None:
            return True
        anchor_path = anchor.path.rstrip("/")
        if anchor.is_tree:
            return path.startswith(anchor_path + "/")
        return path == anchor_path


__all__ = ["TreeResolver"]
