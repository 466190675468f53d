"""VMware Fusion cleaner for virtual machine logs and the Fusion cache."""

import logging
import os
from typing import List

from devsweep.core.cleaner import Cleaner, ToolAbsentError
from devsweep.core.config import CleanupContext
from devsweep.core.targets import CleanupTarget, FileBatch
from devsweep.core.utils import find_named
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.vmware")


class VMwareCleaner(Cleaner):
    """Cleaner for VMware Fusion logs and caches."""

    @property
    def name(self) -> str:
        return "vmware"

    @property
    def title(self) -> str:
        return "Cleaning VMware Fusion"

    @property
    def description(self) -> str:
        return "Removes virtual machine log files and the VMware Fusion cache"

    def vm_dir(self, context: CleanupContext) -> str:
        return context.home_path("Virtual Machines.localized")

    def check_prerequisites(self, context: CleanupContext) -> None:
        if not os.path.isdir(self.vm_dir(context)):
            raise ToolAbsentError("VMware Fusion not found")

    def find_cleanable_items(self, context: CleanupContext) -> list:
        logger.info("Cleaning VMware logs and caches")
        items: List = []

        logs = find_named(self.vm_dir(context), "*.log", kind="file")
        if logs:
            items.append(FileBatch(tuple(logs), "VMware log files"))

        cache = context.home_path("Library", "Caches", "com.vmware.fusion")
        if os.path.isdir(cache):
            items.append(CleanupTarget(cache, "VMware Fusion cache", contents_only=True))

        logger.info("Note: Snapshot cleanup should be done manually through VMware Fusion")
        return items


# Register this cleaner
CLEANER_REGISTRY["vmware"] = VMwareCleaner
