"""Homebrew cleaner implementation for cleaning homebrew caches and old versions."""

import logging
import os
from typing import List, Optional

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import CleanupTarget, tool_command
from devsweep.core.utils import run_command
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.brew")


class HomebrewCleaner(Cleaner):
    """Cleaner for Homebrew caches and old versions."""

    required_tools = ("brew",)

    @property
    def name(self) -> str:
        return "brew"

    @property
    def title(self) -> str:
        return "Cleaning Homebrew"

    @property
    def description(self) -> str:
        return "Cleans Homebrew caches, downloads, and outdated package versions"

    def find_cleanable_items(self, context: CleanupContext) -> list:
        logger.info("Cleaning Homebrew cache and old versions")
        items: List = [
            tool_command(
                "brew cleanup",
                ["brew", "cleanup", "-s"],
                ["brew", "autoremove"],
                confirm=True,
            )
        ]

        cache_dir = self._get_cache_dir()
        if cache_dir and os.path.exists(cache_dir):
            items.append(CleanupTarget(cache_dir, "Homebrew download cache", confirm=True))
        return items

    def _get_cache_dir(self) -> Optional[str]:
        """Ask brew where its download cache lives."""
        result = run_command(["brew", "--cache"], timeout=30)
        if not result.ok or not result.stdout:
            logger.debug(f"Could not determine Homebrew cache: {result.stderr}")
            return None
        return result.stdout.splitlines()[0]


# Register this cleaner
CLEANER_REGISTRY["brew"] = HomebrewCleaner
