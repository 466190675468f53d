"""Shared fixtures for the devsweep tests."""

import os
import shutil
import time

import pytest

from devsweep.core.config import CleanupContext, RunConfig
from devsweep.core.prompt import ConfirmationGate
from devsweep.core.runlog import RunLog


class ScriptedAsk:
    """Stand-in for the interactive prompt that replays fixed answers."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.questions = []

    def __call__(self, question):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else False


@pytest.fixture
def no_tools(monkeypatch):
    """Pretend no external tool is installed."""
    monkeypatch.setattr(shutil, "which", lambda tool, *args, **kwargs: None)


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def make_context(tmp_path, home):
    """Build CleanupContexts rooted in a scratch tree."""
    opened = []

    def _make(config=None, ask=None):
        config = config or RunConfig()
        run_log = RunLog(str(tmp_path / "run.log"))
        opened.append(run_log)
        gate = ConfirmationGate(config, ask or ScriptedAsk())
        system_root = tmp_path / "root"
        temp_dir = tmp_path / "tmp"
        system_root.mkdir(exist_ok=True)
        temp_dir.mkdir(exist_ok=True)
        return CleanupContext(
            config=config,
            gate=gate,
            run_log=run_log,
            home=str(home),
            system_root=str(system_root),
            temp_dir=str(temp_dir),
        )

    yield _make
    for run_log in opened:
        run_log.close()


def write_file(path, content="x" * 100, age_days=None):
    """Create a file, optionally backdating its access and modification times."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if age_days is not None:
        stamp = time.time() - age_days * 24 * 60 * 60
        os.utime(path, (stamp, stamp))
    return path


def snapshot(root):
    """Relative paths and sizes of everything under root."""
    entries = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            full = os.path.join(dirpath, name)
            entries[os.path.relpath(full, root)] = os.lstat(full).st_size
    return entries
