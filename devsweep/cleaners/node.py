"""Node.js cleaner for npm, yarn and pnpm caches."""

import logging
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import ToolCommand, tool_command
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.node")


class NodeCleaner(Cleaner):
    """Cleaner for the caches of the Node package managers."""

    @property
    def name(self) -> str:
        return "node"

    @property
    def title(self) -> str:
        return "Cleaning Node.js / npm / yarn"

    @property
    def description(self) -> str:
        return "Cleans the npm, yarn and pnpm caches with their own commands"

    def find_cleanable_items(self, context: CleanupContext) -> List[ToolCommand]:
        # Each package manager is optional, a missing one is skipped on its own
        return [
            tool_command("npm cache clean", ["npm", "cache", "clean", "--force"]),
            tool_command("yarn cache clean", ["yarn", "cache", "clean"]),
            tool_command("pnpm store prune", ["pnpm", "store", "prune"]),
        ]


# Register this cleaner
CLEANER_REGISTRY["node"] = NodeCleaner
