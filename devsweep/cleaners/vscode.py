"""VSCode cleaner for editor caches and logs."""

import os
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import CleanupTarget
from devsweep.cleaners import CLEANER_REGISTRY

CODE_SUPPORT_DIRS = ["Cache", "CachedData", "CachedExtensions", "CachedExtensionVSIXs", "logs"]


class VSCodeCleaner(Cleaner):
    """Cleaner for VSCode caches, cached extensions and logs."""

    @property
    def name(self) -> str:
        return "vscode"

    @property
    def title(self) -> str:
        return "Cleaning VSCode"

    @property
    def description(self) -> str:
        return "Removes VSCode caches, cached extension packages, logs and obsolete extensions"

    def find_cleanable_items(self, context: CleanupContext) -> List[CleanupTarget]:
        support = context.home_path("Library", "Application Support", "Code")
        dirs = [os.path.join(support, d) for d in CODE_SUPPORT_DIRS]
        dirs.append(context.home_path(".vscode", "extensions", ".obsolete"))

        return [
            CleanupTarget(d, f"VSCode - {os.path.basename(d)}")
            for d in dirs
            if os.path.exists(d)
        ]


# Register this cleaner
CLEANER_REGISTRY["vscode"] = VSCodeCleaner
