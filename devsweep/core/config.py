"""Run configuration and the context handed to every cleaner."""

import os
import tempfile
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_DOWNLOADS_AGE_DAYS = 30


@dataclass(frozen=True)
class RunConfig:
    """Options parsed from the command line, fixed for the whole run."""

    dry_run: bool = False
    verbose: bool = False
    skip_confirmation: bool = False
    downloads_age_days: int = DEFAULT_DOWNLOADS_AGE_DAYS

    def __post_init__(self):
        if self.downloads_age_days < 0:
            raise ValueError(f"downloads_age_days must be >= 0, got {self.downloads_age_days}")

    @property
    def mode(self) -> str:
        return "DRY RUN" if self.dry_run else "LIVE"


@dataclass
class RunReport:
    """Counters collected while the cleaners run."""

    cleaned: int = 0
    skipped: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def record_failure(self, message: str) -> None:
        self.failures.append(message)


@dataclass
class CleanupContext:
    """
    Everything a cleaner needs for one run.

    The filesystem roots are resolved once here so that no cleaner reads the
    environment on its own, which also lets tests point them at a scratch tree.
    """

    config: RunConfig
    gate: "ConfirmationGate"
    run_log: "RunLog"
    home: str = field(default_factory=lambda: os.path.expanduser("~"))
    system_root: str = "/"
    temp_dir: str = field(default_factory=tempfile.gettempdir)
    report: RunReport = field(default_factory=RunReport)

    def home_path(self, *parts: str) -> str:
        return os.path.join(self.home, *parts)

    def system_path(self, *parts: str) -> str:
        return os.path.join(self.system_root, *parts)


def build_context(config: RunConfig, gate, run_log, home: Optional[str] = None,
                  system_root: str = "/", temp_dir: Optional[str] = None) -> CleanupContext:
    """Create a CleanupContext, falling back to the real roots for unset paths."""
    return CleanupContext(
        config=config,
        gate=gate,
        run_log=run_log,
        home=home or os.path.expanduser("~"),
        system_root=system_root,
        temp_dir=temp_dir or tempfile.gettempdir(),
    )
