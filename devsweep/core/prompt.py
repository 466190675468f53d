"""Interactive confirmation before destructive actions."""

import logging
import sys
from typing import Callable

from devsweep.core.config import RunConfig

logger = logging.getLogger("devsweep.prompt")

AskFunction = Callable[[str], bool]


def _read_char() -> str:
    """Read one keypress from the terminal without waiting for Enter."""
    import termios
    import tty

    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def ask_yes_no(question: str) -> bool:
    """
    Ask the operator a yes/no question.

    On a terminal a single keypress answers. Otherwise one line is read from
    stdin. Only "y" or "Y" counts as yes; end of input counts as no.
    """
    sys.stdout.write(f"{question} (y/N): ")
    sys.stdout.flush()

    if sys.stdin.isatty():
        answer = _read_char()
    else:
        answer = sys.stdin.readline()
        if not answer:
            logger.debug("No answer on stdin, treating as no")
    sys.stdout.write("\n")
    return answer.strip() in ("y", "Y")


class ConfirmationGate:
    """Decides whether a destructive action may proceed."""

    def __init__(self, config: RunConfig, ask: AskFunction = ask_yes_no):
        self.config = config
        self.ask = ask

    def confirm(self, question: str = "Proceed with this cleanup?") -> bool:
        """
        Return True if the action may go ahead.

        Dry runs never mutate anything, so they never ask. The same goes for
        runs started with --yes.
        """
        if self.config.skip_confirmation or self.config.dry_run:
            return True
        return bool(self.ask(question))
