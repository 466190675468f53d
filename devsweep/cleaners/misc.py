"""Miscellaneous cleaner for Finder metadata, mail attachments and temp files."""

import logging
import os
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import CleanupTarget, FileBatch
from devsweep.core.utils import find_named, has_entries, path_size
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.misc")


class MiscCleaner(Cleaner):
    """Cleaner for .DS_Store files, Mail Downloads and the system temp directory."""

    @property
    def name(self) -> str:
        return "misc"

    @property
    def title(self) -> str:
        return "Cleaning Miscellaneous"

    @property
    def description(self) -> str:
        return "Removes .DS_Store files, Mail Downloads and temporary files"

    def find_cleanable_items(self, context: CleanupContext) -> list:
        items: List = []

        logger.info("Searching for .DS_Store files...")
        ds_store = find_named(context.home, ".DS_Store", kind="file", exclude=("Library",))
        if ds_store:
            items.append(FileBatch(tuple(ds_store), ".DS_Store files"))

        # Backups are only reported, deleting them belongs in Finder
        backups = context.home_path("Library", "Application Support", "MobileSync", "Backup")
        if os.path.isdir(backups):
            logger.info(f"Found iOS backups: {path_size(backups)}")
            logger.info("Note: Manual deletion recommended - use Finder > Manage Backups")

        mail_downloads = context.home_path("Library", "Mail Downloads")
        if has_entries(mail_downloads):
            items.append(CleanupTarget(mail_downloads, "Mail Downloads", contents_only=True))

        if has_entries(context.temp_dir):
            items.append(CleanupTarget(context.temp_dir, "temporary files", confirm=True, contents_only=True))
        return items


# Register this cleaner
CLEANER_REGISTRY["misc"] = MiscCleaner
