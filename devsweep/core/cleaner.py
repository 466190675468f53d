"""
Cleaner base class and interfaces.

Every cleaner covers one tool or location class. It lists what it could
clean, and the template method :meth:`Cleaner.clean` takes care of tool
checks, confirmation and per-item error isolation, so that one failing item
never stops the rest of the sweep.
"""

import abc
import logging
from typing import Sequence, Tuple

from devsweep.core.config import CleanupContext
from devsweep.core.utils import require_tool

# Set up logger
logger = logging.getLogger("devsweep.core")


class CleanerError(Exception):
    """Base exception for cleaner-related errors."""
    pass


class ToolAbsentError(CleanerError):
    """Raised when a tool or location a cleaner relies on is not present."""
    pass


class OperationFailedError(CleanerError):
    """Raised when a deletion or a native cleanup command fails."""
    pass


def log_header(title: str) -> None:
    bar = "=" * (len(title) + 4)
    plain = {"plain": True}
    logger.info("", extra=plain)
    logger.info(bar, extra=plain)
    logger.info(f"  {title}", extra=plain)
    logger.info(bar, extra=plain)


class Cleaner(abc.ABC):
    """Abstract base class for all cleaners."""

    #: Executables that must be on PATH for the cleaner to run at all
    required_tools: Tuple[str, ...] = ()

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Get the name of the cleaner."""
        pass

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Get a description of what this cleaner does."""
        pass

    @property
    def title(self) -> str:
        """Header shown before the cleaner runs."""
        return f"Cleaning {self.name}"

    def check_prerequisites(self, context: CleanupContext) -> None:
        """
        Check that everything this cleaner needs is present.

        Raises:
            ToolAbsentError: If something is missing; the cleaner is skipped
        """
        for tool in self.required_tools:
            require_tool(tool)

    @abc.abstractmethod
    def find_cleanable_items(self, context: CleanupContext) -> Sequence:
        """
        Find the items this cleaner would clean.

        Args:
            context: The run context

        Returns:
            Items exposing ``label``, ``confirm``, ``requires`` and ``run(context)``
        """
        pass

    def nothing_found(self, context: CleanupContext) -> None:
        logger.debug(f"Nothing to clean for {self.name}")

    def clean(self, context: CleanupContext) -> None:
        """
        Main method to run the cleaner.

        This is a template method that defines the cleaning workflow.
        Subclasses should not override this method but implement the abstract methods.
        """
        log_header(self.title)

        try:
            self.check_prerequisites(context)
        except ToolAbsentError as e:
            logger.info(f"{e}, skipping")
            context.report.skipped += 1
            return

        items = self.find_cleanable_items(context)
        if not items:
            self.nothing_found(context)
            return

        for item in items:
            self._clean_one(item, context)

    def _clean_one(self, item, context: CleanupContext) -> None:
        try:
            for tool in item.requires:
                require_tool(tool)
        except ToolAbsentError as e:
            logger.info(f"{e}, skipping {item.label}")
            context.report.skipped += 1
            return

        if item.confirm and not context.config.dry_run:
            if not context.gate.confirm(f"Proceed with cleaning {item.label}?"):
                logger.warning(f"Skipped {item.label}")
                context.report.skipped += 1
                return

        try:
            if item.run(context):
                context.report.cleaned += 1
        except OperationFailedError as e:
            logger.warning(str(e))
            context.report.record_failure(str(e))
