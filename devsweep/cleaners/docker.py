"""Docker cleaner implementation for pruning unused Docker resources."""

import logging
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import ToolCommand, tool_command
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.docker")


class DockerCleaner(Cleaner):
    """Cleaner for Docker containers, images, volumes and build cache."""

    required_tools = ("docker",)

    def __init__(self, command_timeout: int = 600):
        """
        Initialize the Docker cleaner.

        Args:
            command_timeout: Timeout for each prune command in seconds
        """
        self.command_timeout = command_timeout

    @property
    def name(self) -> str:
        return "docker"

    @property
    def title(self) -> str:
        return "Cleaning Docker"

    @property
    def description(self) -> str:
        return "Prunes stopped containers, dangling images, unused volumes and build cache"

    def find_cleanable_items(self, context: CleanupContext) -> List[ToolCommand]:
        logger.info("Docker cleanup - removing unused images, containers, and volumes")
        return [
            tool_command(
                "Docker cleanup",
                ["docker", "container", "prune", "-f"],
                ["docker", "image", "prune", "-f"],
                ["docker", "volume", "prune", "-f"],
                ["docker", "builder", "prune", "-f"],
                confirm=True,
                status=("docker", "system", "df"),
                timeout=self.command_timeout,
            )
        ]


# Register this cleaner
CLEANER_REGISTRY["docker"] = DockerCleaner
