"""Downloads cleaner for files older than the configured age."""

import logging
import os
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import FileBatch
from devsweep.core.utils import find_files_older_than
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.downloads")


class DownloadsCleaner(Cleaner):
    """Cleaner for old files in ~/Downloads."""

    @property
    def name(self) -> str:
        return "downloads"

    @property
    def title(self) -> str:
        return "Cleaning Old Downloads"

    @property
    def description(self) -> str:
        return "Deletes files in ~/Downloads older than --age days"

    def find_cleanable_items(self, context: CleanupContext) -> List[FileBatch]:
        downloads_dir = context.home_path("Downloads")
        if not os.path.isdir(downloads_dir):
            logger.debug(f"{downloads_dir} not found")
            return []

        days = context.config.downloads_age_days
        logger.info(f"Finding files older than {days} days in Downloads")

        old_files = find_files_older_than(downloads_dir, days)
        if not old_files:
            logger.info("No old files found in Downloads")
            return []

        logger.info(f"Found {len(old_files)} files older than {days} days")
        return [FileBatch(tuple(old_files), f"downloads older than {days} days", confirm=True)]


# Register this cleaner
CLEANER_REGISTRY["downloads"] = DownloadsCleaner
