"""Per-run log file recording what was actually removed."""

import logging
import os
from datetime import datetime
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RunLog:
    """
    Append-only log of a single run.

    The file is opened (and created) immediately and only ever appended to.
    Without a path, entries are accepted and dropped.
    """

    def __init__(self, path: Optional[str]):
        self.path = path
        self._closed = False
        self._logger = logging.getLogger("devsweep.runlog")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        self._handler: Optional[logging.FileHandler] = None
        if path is not None:
            self._handler = logging.FileHandler(path, mode="a", encoding="utf-8")
            self._handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
            self._logger.addHandler(self._handler)

    @classmethod
    def for_start_time(cls, directory: str, started: Optional[datetime] = None) -> "RunLog":
        """Open the log named after the run's start time inside ``directory``."""
        started = started or datetime.now()
        filename = f".cleanup_log_{started.strftime('%Y%m%d_%H%M%S')}.txt"
        return cls(os.path.join(directory, filename))

    def record(self, message: str) -> None:
        if self._closed:
            raise ValueError(f"Run log {self.path} is closed")
        if self._handler is not None:
            self._logger.info(message)

    def close(self) -> None:
        self._closed = True
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None

    def __enter__(self) -> "RunLog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
