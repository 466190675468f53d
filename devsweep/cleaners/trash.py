"""Trash cleaner."""

import logging
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import CleanupTarget
from devsweep.core.utils import has_entries
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.trash")


class TrashCleaner(Cleaner):
    """Empties ~/.Trash."""

    @property
    def name(self) -> str:
        return "trash"

    @property
    def title(self) -> str:
        return "Emptying Trash"

    @property
    def description(self) -> str:
        return "Empties the Trash"

    def find_cleanable_items(self, context: CleanupContext) -> List[CleanupTarget]:
        trash = context.home_path(".Trash")
        if not has_entries(trash):
            return []
        return [CleanupTarget(trash, "Trash", confirm=True, contents_only=True)]

    def nothing_found(self, context: CleanupContext) -> None:
        logger.info("Trash is already empty")


# Register this cleaner
CLEANER_REGISTRY["trash"] = TrashCleaner
