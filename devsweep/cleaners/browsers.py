"""Browser cleaner for Chrome, Safari and Firefox caches."""

import logging
import os
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import CleanupTarget
from devsweep.core.utils import path_size
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.browsers")

# (path under ~/Library, label)
BROWSER_CACHE_PATHS = [
    (("Caches", "Google", "Chrome"), "Chrome cache"),
    (("Caches", "com.apple.Safari"), "Safari cache"),
    (("Caches", "Firefox"), "Firefox cache"),
    (("Safari", "LocalStorage"), "Safari local storage"),
]


class BrowserCleaner(Cleaner):
    """Cleaner for browser caches."""

    @property
    def name(self) -> str:
        return "browsers"

    @property
    def title(self) -> str:
        return "Cleaning Browser Caches"

    @property
    def description(self) -> str:
        return "Removes Chrome, Safari and Firefox caches"

    def find_cleanable_items(self, context: CleanupContext) -> List[CleanupTarget]:
        items = []
        for parts, label in BROWSER_CACHE_PATHS:
            cache = context.home_path("Library", *parts)
            if os.path.isdir(cache):
                logger.info(f"Found {label}: {path_size(cache)}")
                items.append(CleanupTarget(cache, label, confirm=True))
        return items


# Register this cleaner
CLEANER_REGISTRY["browsers"] = BrowserCleaner
