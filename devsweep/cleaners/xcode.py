"""Xcode cleaner implementation for cleaning Xcode caches and derived data."""

import logging
import os
from typing import List

from devsweep.core.cleaner import Cleaner, ToolAbsentError
from devsweep.core.config import CleanupContext
from devsweep.core.targets import CleanupTarget, tool_command
from devsweep.core.utils import path_size
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.xcode")


class XcodeCleaner(Cleaner):
    """Cleaner for Xcode derived data, caches, archives and stale simulators."""

    @property
    def name(self) -> str:
        return "xcode"

    @property
    def title(self) -> str:
        return "Cleaning Xcode"

    @property
    def description(self) -> str:
        return "Cleans Xcode derived data, archives, caches and unavailable simulators"

    def check_prerequisites(self, context: CleanupContext) -> None:
        """Check if Xcode is installed."""
        if not os.path.exists(context.system_path("Applications", "Xcode.app")):
            raise ToolAbsentError("Xcode not installed")

    def find_cleanable_items(self, context: CleanupContext) -> list:
        xcode_dirs = [
            context.home_path("Library", "Developer", "Xcode", "DerivedData"),
            context.home_path("Library", "Developer", "Xcode", "Archives"),
            context.home_path("Library", "Caches", "com.apple.dt.Xcode"),
        ]

        items: List = []
        for d in xcode_dirs:
            if os.path.isdir(d):
                logger.info(f"Found: {os.path.basename(d)} ({path_size(d)})")
                items.append(CleanupTarget(d, f"Xcode - {os.path.basename(d)}", confirm=True))

        logger.info("Checking for old iOS simulators...")
        items.append(tool_command(
            "removal of unavailable simulators",
            ["xcrun", "simctl", "delete", "unavailable"],
            confirm=True,
        ))
        return items


# Register this cleaner
CLEANER_REGISTRY["xcode"] = XcodeCleaner
