"""Utility functions for the devsweep application."""

import fnmatch
import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger("devsweep.utils")

# Between INFO and WARNING, used for "cleaned" style messages
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command run by :func:`run_command`."""

    argv: Sequence[str]
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)


def run_command(argv: Sequence[str], cwd: Optional[str] = None, timeout: Optional[int] = 30) -> CommandResult:
    """
    Run an external command and capture its result.

    The command is never run through a shell and this function never raises:
    a missing executable gives returncode 127 and a timeout gives returncode None.

    Args:
        argv: The command and its arguments
        cwd: The working directory to run the command in
        timeout: Timeout in seconds for the command (default: 30)

    Returns:
        The captured CommandResult
    """
    argv = list(argv)
    command_line = " ".join(argv)
    logger.debug(f"Running command: {command_line} in directory: {cwd or os.getcwd()}")

    start_time = time.time()
    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
            cwd=cwd,
            timeout=timeout
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"Command timed out after {timeout} seconds: {command_line}")
        return CommandResult(argv, None, "", f"timed out after {timeout} seconds")
    except FileNotFoundError as e:
        logger.debug(f"Command not found: {command_line}: {e}")
        return CommandResult(argv, 127, "", str(e))
    except OSError as e:
        logger.debug(f"Unexpected error running command: {command_line}, error: {e}")
        return CommandResult(argv, 126, "", str(e))

    execution_time = time.time() - start_time
    logger.debug(f"Command exited with {completed.returncode} after {execution_time:.2f} seconds")
    return CommandResult(argv, completed.returncode, completed.stdout.strip(), completed.stderr.strip())


def which(tool: str) -> Optional[str]:
    """Return the full path of an executable on PATH, or None."""
    return shutil.which(tool)


def require_tool(tool: str) -> str:
    """
    Make sure an executable is installed.

    Raises:
        ToolAbsentError: If the tool is not found on PATH
    """
    # Imported here, cleaner.py imports this module
    from devsweep.core.cleaner import ToolAbsentError

    path = which(tool)
    if path is None:
        raise ToolAbsentError(f"{tool} not installed")
    return path


def get_size(path: str) -> int:
    """
    Calculate the size of a file or directory in bytes.

    Symlinks are counted by their own size and never followed. Entries that
    disappear or cannot be read while walking are ignored.

    Args:
        path: Path to the file or directory

    Returns:
        Size in bytes
    """
    if not os.path.isdir(path) or os.path.islink(path):
        return os.lstat(path).st_size

    total_size = 0
    for dirpath, dirnames, filenames in os.walk(path):
        for f in filenames:
            fp = os.path.join(dirpath, f)
            try:
                total_size += os.lstat(fp).st_size
            except OSError:
                continue
    return total_size


def human_readable_size(size_bytes: float) -> str:
    """
    Convert size in bytes to human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string (e.g., "4.20 MB")
    """
    if size_bytes == 0:
        return "0B"

    size_names = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while size_bytes >= 1024 and i < len(size_names) - 1:
        size_bytes /= 1024
        i += 1

    return f"{size_bytes:.2f} {size_names[i]}"


def path_size(path: str) -> str:
    """Human-readable size of a path, "0B" if it is missing or unreadable."""
    if not os.path.lexists(path):
        return "0B"
    try:
        return human_readable_size(get_size(path))
    except OSError as e:
        logger.debug(f"Could not compute size of {path}: {e}")
        return "0B"


def has_entries(path: str) -> bool:
    """
    Whether ``path`` is a directory with something in it.

    A directory that cannot be listed counts as non-empty, so that the
    failure is reported when it is cleaned rather than while searching.
    """
    if not os.path.isdir(path):
        return False
    try:
        return bool(os.listdir(path))
    except OSError as e:
        logger.debug(f"Could not list {path}: {e}")
        return True


def paths_size(paths: Iterable[str]) -> str:
    """Human-readable total size of several paths."""
    total = 0
    for path in paths:
        try:
            total += get_size(path)
        except OSError:
            continue
    return human_readable_size(total)


def disk_usage_summary(path: str = "/") -> str:
    """Describe how full the volume holding ``path`` is."""
    try:
        usage = shutil.disk_usage(path)
    except OSError as e:
        logger.debug(f"Could not read disk usage for {path}: {e}")
        return "unknown"
    percent = round(usage.used * 100 / usage.total) if usage.total else 0
    return (f"{human_readable_size(usage.used)} used of "
            f"{human_readable_size(usage.total)} ({percent}% full)")


def find_files_older_than(root: str, days: int, now: Optional[float] = None,
                          attr: str = "st_mtime") -> List[str]:
    """
    Find regular files under ``root`` older than ``days``.

    A file qualifies when ``now - stat.<attr>`` is strictly more than
    ``days`` days. ``now`` is read once per call.

    Args:
        root: Directory to search recursively
        days: Age threshold in days
        now: Reference timestamp, defaults to the current time
        attr: Stat attribute to compare (st_mtime or st_atime)

    Returns:
        Sorted list of matching file paths
    """
    if now is None:
        now = time.time()
    threshold = days * SECONDS_PER_DAY

    old_files = []
    for dirpath, dirnames, filenames in os.walk(root):
        for f in filenames:
            fp = os.path.join(dirpath, f)
            try:
                stat_info = os.lstat(fp)
            except OSError:
                continue
            if os.path.islink(fp):
                continue
            if now - getattr(stat_info, attr) > threshold:
                old_files.append(fp)
    return sorted(old_files)


def find_named(root: str, pattern: str, kind: str = "file",
               exclude: Iterable[str] = ()) -> List[str]:
    """
    Find files or directories whose name matches a glob pattern.

    Args:
        root: Directory to search recursively
        pattern: Glob pattern matched against the basename
        kind: "file" or "dir"
        exclude: Directory names never descended into

    Returns:
        Sorted list of matching paths
    """
    excluded = set(exclude)
    matches = []
    for dirpath, dirnames, filenames in os.walk(root):
        if kind == "dir":
            for d in list(dirnames):
                if fnmatch.fnmatch(d, pattern):
                    matches.append(os.path.join(dirpath, d))
                    dirnames.remove(d)
        else:
            for f in filenames:
                if fnmatch.fnmatch(f, pattern):
                    matches.append(os.path.join(dirpath, f))
        dirnames[:] = [d for d in dirnames if d not in excluded]
    return sorted(matches)
