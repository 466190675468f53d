"""System cleaner for stale files in the OS cache and log directories."""

import logging
import os
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import FileBatch
from devsweep.core.utils import find_files_older_than, path_size
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.system")

# Files in these locations that nothing has read for this long are removed
STALE_AFTER_DAYS = 3


class SystemCachesCleaner(Cleaner):
    """Cleaner for user and system caches and logs."""

    @property
    def name(self) -> str:
        return "system"

    @property
    def title(self) -> str:
        return "Cleaning System Caches"

    @property
    def description(self) -> str:
        return f"Removes cache and log files not accessed for {STALE_AFTER_DAYS} days"

    def cache_dirs(self, context: CleanupContext) -> List[str]:
        return [
            context.home_path("Library", "Caches"),
            context.system_path("Library", "Caches"),
            context.home_path("Library", "Logs"),
            context.system_path("Library", "Logs"),
            context.system_path("System", "Library", "Caches"),
        ]

    def find_cleanable_items(self, context: CleanupContext) -> List[FileBatch]:
        items = []
        for cache in self.cache_dirs(context):
            if not os.path.isdir(cache):
                logger.debug(f"Skipping {cache} - not found")
                continue

            logger.info(f"Found cache: {cache} ({path_size(cache)})")
            stale = find_files_older_than(cache, STALE_AFTER_DAYS, attr="st_atime")
            if not stale:
                logger.info(f"No stale files in {cache}")
                continue
            items.append(FileBatch(tuple(stale), f"stale files in {cache}", confirm=True))
        return items


# Register this cleaner
CLEANER_REGISTRY["system"] = SystemCachesCleaner
