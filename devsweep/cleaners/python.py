"""Python cleaner implementation for cleaning the pip cache and bytecode caches."""

import logging
import os
from typing import List, Optional

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import FileBatch, tool_command
from devsweep.core.utils import find_named, path_size, run_command, which
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.python")

# Application data under ~/Library is left alone
EXCLUDED_DIRS = ("Library", ".Trash")


class PythonCleaner(Cleaner):
    """Cleaner for the pip cache, __pycache__ directories and stray .pyc files."""

    @property
    def name(self) -> str:
        return "python"

    @property
    def title(self) -> str:
        return "Cleaning Python"

    @property
    def description(self) -> str:
        return "Purges the pip cache and removes __pycache__ directories and .pyc files"

    def find_cleanable_items(self, context: CleanupContext) -> list:
        items: List = []

        pip_cache = self._find_pip_cache(context)
        if pip_cache and os.path.isdir(pip_cache):
            logger.info(f"Found pip cache: {path_size(pip_cache)}")
            items.append(tool_command("pip cache purge", ["pip3", "cache", "purge"]))

        logger.info("Searching for __pycache__ directories...")
        pycache_dirs = find_named(context.home, "__pycache__", kind="dir", exclude=EXCLUDED_DIRS)
        if pycache_dirs:
            items.append(FileBatch(tuple(pycache_dirs), "__pycache__ directories"))
        else:
            logger.info("No __pycache__ directories found")

        # Matched __pycache__ directories are not descended into, so these are stray ones
        pyc_files = find_named(context.home, "*.pyc", kind="file", exclude=EXCLUDED_DIRS + ("__pycache__",))
        if pyc_files:
            items.append(FileBatch(tuple(pyc_files), ".pyc files"))
        return items

    def _find_pip_cache(self, context: CleanupContext) -> Optional[str]:
        if which("pip3") is None:
            logger.debug("pip3 not installed, skipping pip cache")
            return None

        result = run_command(["pip3", "cache", "dir"], timeout=30)
        if result.ok and result.stdout:
            return result.stdout.splitlines()[-1]
        return context.home_path("Library", "Caches", "pip")


# Register this cleaner
CLEANER_REGISTRY["python"] = PythonCleaner
