"""
Things a cleaner can clean.

A cleaner returns a list of these items. Each knows how to report itself in
a dry run and how to remove itself in a live run:

- CleanupTarget: a directory (or file) removed recursively, or emptied
- FileBatch: an explicit, pre-filtered set of paths
- ToolCommand: a tool's own cleanup command, such as ``docker image prune``
"""

import logging
import os
import shutil
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from devsweep.core.cleaner import OperationFailedError
from devsweep.core.config import CleanupContext
from devsweep.core.utils import SUCCESS, path_size, paths_size, run_command

logger = logging.getLogger("devsweep.targets")


def remove_path(path: str) -> None:
    """
    Remove a file, symlink or directory tree.

    A path that is already gone counts as removed.
    """
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.unlink(path)
    except FileNotFoundError:
        logger.debug(f"{path} vanished before it could be removed")


def remove_contents(path: str) -> Tuple[int, List[Tuple[str, OSError]]]:
    """Remove every entry inside ``path``, returning how many went and the ones that failed."""
    removed = 0
    failures = []
    for entry in sorted(os.listdir(path)):
        entry_path = os.path.join(path, entry)
        try:
            remove_path(entry_path)
        except OSError as e:
            failures.append((entry_path, e))
        else:
            removed += 1
    return removed, failures


@dataclass(frozen=True)
class CleanupTarget:
    """A single path to delete, or to empty when ``contents_only`` is set."""

    path: str
    label: str
    confirm: bool = False
    contents_only: bool = False

    @property
    def requires(self) -> Tuple[str, ...]:
        return ()

    def run(self, context: CleanupContext) -> bool:
        return clean_directory(self, context)


def clean_directory(target: CleanupTarget, context: CleanupContext) -> bool:
    """
    Report and remove a cleanup target.

    A missing path is a no-op. In a dry run only the intent is reported.

    Returns:
        True if something was removed

    Raises:
        OperationFailedError: If the removal failed
    """
    if not os.path.lexists(target.path):
        logger.debug(f"Skipping {target.label} - not found")
        return False

    size = path_size(target.path)
    logger.info(f"Cleaning: {target.label} ({size})")

    if context.config.dry_run:
        logger.warning(f"[DRY RUN] Would clean {target.label} ({size})")
        return False

    if target.contents_only:
        try:
            removed, failures = remove_contents(target.path)
        except OSError as e:
            raise OperationFailedError(f"Failed to clean {target.label}: {e}") from e
        if failures:
            for entry_path, error in failures:
                logger.debug(f"Could not remove {entry_path}: {error}")
            if removed:
                context.run_log.record(f"Partly cleaned {target.label}: removed {removed} entries")
            raise OperationFailedError(
                f"Failed to clean {target.label}: {len(failures)} entries could not be removed"
            )
    else:
        try:
            remove_path(target.path)
        except OSError as e:
            raise OperationFailedError(f"Failed to clean {target.label}: {e}") from e

    logger.log(SUCCESS, f"Cleaned: {target.label} (freed {size})")
    context.run_log.record(f"Cleaned {target.label}: {size}")
    return True


@dataclass(frozen=True)
class FileBatch:
    """A filtered set of files or directories deleted together."""

    paths: Tuple[str, ...]
    label: str
    confirm: bool = False

    @property
    def requires(self) -> Tuple[str, ...]:
        return ()

    def run(self, context: CleanupContext) -> bool:
        if not self.paths:
            logger.debug(f"No {self.label} found")
            return False

        size = paths_size(self.paths)
        count = len(self.paths)
        if context.config.dry_run:
            logger.warning(f"[DRY RUN] Would delete {count} {self.label} ({size})")
            for path in self.paths:
                logger.debug(f"  {path}")
            return False

        failed = 0
        for path in self.paths:
            try:
                remove_path(path)
            except OSError as e:
                failed += 1
                logger.debug(f"Could not remove {path}: {e}")

        removed = count - failed
        if removed:
            logger.log(SUCCESS, f"Deleted {removed} {self.label} (freed up to {size})")
            context.run_log.record(f"Deleted {removed} {self.label}: {size}")
        if failed:
            raise OperationFailedError(f"Failed to delete {failed} of {count} {self.label}")
        return True


@dataclass(frozen=True)
class ToolCommand:
    """
    A tool's own cleanup, run as one or more commands.

    ``status`` is a read-only command shown in dry runs, and before and after
    the cleanup in live runs.
    """

    label: str
    steps: Tuple[Tuple[str, ...], ...]
    confirm: bool = False
    cwd: Optional[str] = None
    status: Optional[Tuple[str, ...]] = None
    timeout: Optional[int] = 600

    @property
    def requires(self) -> Tuple[str, ...]:
        tools = []
        for argv in self.steps + ((self.status,) if self.status else ()):
            if argv[0] not in tools:
                tools.append(argv[0])
        return tuple(tools)

    def run(self, context: CleanupContext) -> bool:
        location = f" in {self.cwd}" if self.cwd else ""
        if context.config.dry_run:
            if self.status:
                self._show_status()
            for argv in self.steps:
                logger.warning(f"[DRY RUN] Would run: {' '.join(argv)}{location}")
            return False

        logger.info(f"Running {self.label}{location}")
        if self.status:
            self._show_status()

        failed: List[str] = []
        for argv in self.steps:
            result = run_command(argv, cwd=self.cwd, timeout=self.timeout)
            _pass_through(result.stdout)
            if not result.ok:
                reason = result.stderr.splitlines()[-1] if result.stderr else f"exit status {result.returncode}"
                failed.append(f"{result.command_line} ({reason})")

        if self.status:
            self._show_status()

        if len(failed) == len(self.steps):
            raise OperationFailedError(f"{self.label} failed: {'; '.join(failed)}")

        logger.log(SUCCESS, f"{self.label} complete")
        context.run_log.record(f"Ran {self.label}{location}")
        if failed:
            raise OperationFailedError(f"{self.label} partly failed: {'; '.join(failed)}")
        return True

    def _show_status(self) -> None:
        result = run_command(self.status, timeout=60)
        if result.ok:
            for line in result.stdout.splitlines():
                logger.info(f"  {line}")
        else:
            logger.debug(f"{result.command_line} failed: {result.stderr}")


def _pass_through(output: str) -> None:
    for line in output.splitlines():
        logger.debug(f"  {line}")


def tool_command(label: str, *steps: Sequence[str], **kwargs) -> ToolCommand:
    """Build a ToolCommand from plain argument lists."""
    return ToolCommand(label=label, steps=tuple(tuple(step) for step in steps), **kwargs)
