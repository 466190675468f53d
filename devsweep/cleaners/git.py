"""Git cleaner implementation for garbage-collecting local repositories."""

import logging
import os
from typing import List

from devsweep.core.cleaner import Cleaner
from devsweep.core.config import CleanupContext
from devsweep.core.targets import ToolCommand, tool_command
from devsweep.cleaners import CLEANER_REGISTRY

logger = logging.getLogger("devsweep.cleaners.git")


class GitCleaner(Cleaner):
    """Cleaner that runs git gc on the repositories under ~/Code."""

    required_tools = ("git",)

    def __init__(self, code_dir: str = "Code", max_depth: int = 5):
        """
        Initialize the Git cleaner.

        Args:
            code_dir: Directory under the home directory holding repositories
            max_depth: Maximum depth to search for repositories
        """
        self.code_dir = code_dir
        self.max_depth = max_depth

    @property
    def name(self) -> str:
        return "git"

    @property
    def title(self) -> str:
        return "Cleaning Git Repositories"

    @property
    def description(self) -> str:
        return "Runs aggressive git garbage collection on local repositories"

    def find_cleanable_items(self, context: CleanupContext) -> List[ToolCommand]:
        root = context.home_path(self.code_dir)
        logger.info(f"Running git garbage collection on repositories in {root}")
        if not os.path.isdir(root):
            logger.debug(f"{root} not found")
            return []

        return [
            tool_command(
                f"git gc for {os.path.basename(repo)}",
                ["git", "gc", "--aggressive", "--prune=now"],
                cwd=repo,
            )
            for repo in self._find_git_repos(root, self.max_depth)
        ]

    def _is_git_repo(self, path: str) -> bool:
        """
        Check if the given path is a Git repository.

        Args:
            path: Path to check

        Returns:
            True if the path is a Git repo, False otherwise
        """
        git_dir = os.path.join(path, '.git')
        return os.path.isdir(git_dir)

    def _find_git_repos(self, start_dir: str, max_depth: int = 5) -> List[str]:
        """
        Find Git repositories under the start directory up to a maximum depth.

        Args:
            start_dir: Directory to start searching from
            max_depth: Maximum depth to search

        Returns:
            List of paths to Git repositories
        """
        repos = []

        if max_depth <= 0:
            return repos

        try:
            # Check if the start directory itself is a Git repo
            if self._is_git_repo(start_dir):
                repos.append(start_dir)
                return repos  # Don't look for nested repos

            for item in sorted(os.listdir(start_dir)):
                item_path = os.path.join(start_dir, item)

                # Skip hidden directories
                if item.startswith('.'):
                    continue

                if not os.path.isdir(item_path) or os.path.islink(item_path):
                    continue

                if self._is_git_repo(item_path):
                    repos.append(item_path)
                else:
                    repos.extend(self._find_git_repos(item_path, max_depth - 1))
        except OSError as e:
            logger.warning(f"Error accessing directory {start_dir}: {e}")

        return repos


# Register this cleaner
CLEANER_REGISTRY["git"] = GitCleaner
