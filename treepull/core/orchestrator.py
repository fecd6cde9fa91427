"""
Orchestrator running the complete download: one tree listing, then one
fetch per selected file, strictly in order.
"""

from typing import Optional

from ..models import DownloadConfig, DownloadResult, DownloadStatus
from ..infrastructure.error_handler import TreepullError
from .resolver import TreeResolver
from .fetcher import Fetcher

from treepull.infrastructure.logger import logger


####
##      DOWNLOAD ORCHESTRATOR
#####
class DownloadOrchestrator:
    """
    Runs the resolver once and the fetcher once per task.

    The first failing task stops the run. Files already written are left
    in place and the remaining tasks are not attempted.
    """

    def __init__(self, resolver: TreeResolver, fetcher: Fetcher):
        self.resolver = resolver
        self.fetcher = fetcher
        self._current_result: Optional[DownloadResult] = None

    def execute(self, config: DownloadConfig) -> DownloadResult:
        """
        Execute the complete download process.

        Args:
            config: Run configuration

        Returns:
            DownloadResult describing what was downloaded

        Raises:
            TreepullError: The first error met, unchanged; the failed result
                stays available through ``last_result``
        """
        coordinate = config.coordinate
        logger.debug(f"Starting download of {coordinate}")

        result = DownloadResult(
            coordinate=coordinate,
            scope=config.scope,
            status=DownloadStatus.IN_PROGRESS
        )
        self._current_result = result

        try:
            tasks = self.resolver.resolve(coordinate, config.scope)
        except TreepullError as e:
            logger.error(f"Listing {coordinate} failed: {e}")
            result.mark_failed(None, e)
            raise

        result.matched_files = [task.relative_path for task in tasks]

        if config.dry_run:
            result.mark_completed()
            logger.debug(f"Dry-run: {len(tasks)} files matched")
            return result

        for task in tasks:
            try:
                written = self.fetcher.download(task, config.destination)
            except TreepullError as e:
                logger.error(f"Failed to download {task.relative_path}: {e}")
                result.mark_failed(task.relative_path, e)
                raise
            result.record_file(task.relative_path, written)

        result.mark_completed()
        logger.info(
            f"Downloaded {len(result.downloaded_files)} files "
            f"({result.total_bytes} bytes) from {coordinate}"
        )
        return result

    @property
    def last_result(self) -> Optional[DownloadResult]:
        return self._current_result


__all__ = ["DownloadOrchestrator"]
