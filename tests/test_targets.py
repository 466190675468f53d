"""Tests for cleanup targets, file batches and tool commands."""

import os
import shutil

import pytest

from devsweep.core import targets
from devsweep.core.cleaner import OperationFailedError
from devsweep.core.config import RunConfig
from devsweep.core.targets import CleanupTarget, FileBatch, clean_directory, tool_command
from devsweep.core.utils import CommandResult

from conftest import snapshot, write_file


def test_missing_target_is_a_noop(make_context, tmp_path):
    context = make_context(RunConfig())
    target = CleanupTarget(str(tmp_path / "nowhere"), "nothing")

    assert clean_directory(target, context) is False
    assert context.report.failed == 0


def test_dry_run_reports_without_deleting(make_context, home, caplog):
    caplog.set_level("INFO", logger="devsweep")
    cache = home / "cache"
    write_file(cache / "blob", "x" * 1024)
    before = snapshot(home)
    context = make_context(RunConfig(dry_run=True))

    assert clean_directory(CleanupTarget(str(cache), "Example cache"), context) is False

    assert snapshot(home) == before
    assert "[DRY RUN] Would clean Example cache (1.00 KB)" in caplog.text


def test_live_run_deletes_and_logs(make_context, home, tmp_path, caplog):
    caplog.set_level("INFO", logger="devsweep")
    cache = home / "cache"
    write_file(cache / "blob", "x" * 1024)
    context = make_context(RunConfig())

    assert clean_directory(CleanupTarget(str(cache), "Example cache"), context) is True

    assert not cache.exists()
    assert "Cleaned: Example cache (freed 1.00 KB)" in caplog.text
    assert "Cleaned Example cache: 1.00 KB" in (tmp_path / "run.log").read_text()


def test_contents_only_keeps_the_directory(make_context, home):
    trash = home / ".Trash"
    write_file(trash / "old.txt")
    (trash / "folder").mkdir()
    context = make_context(RunConfig())

    clean_directory(CleanupTarget(str(trash), "Trash", contents_only=True), context)

    assert trash.is_dir()
    assert os.listdir(trash) == []


def test_failed_delete_raises_operation_failed(make_context, home, monkeypatch):
    cache = home / "locked"
    write_file(cache / "blob")

    def refuse(path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(shutil, "rmtree", refuse)
    context = make_context(RunConfig())

    with pytest.raises(OperationFailedError, match="Failed to clean locked cache"):
        clean_directory(CleanupTarget(str(cache), "locked cache"), context)
    assert cache.exists()


def test_file_batch_deletes_exactly_its_paths(make_context, home):
    doomed = write_file(home / "Downloads" / "old.zip")
    kept = write_file(home / "Downloads" / "new.zip")
    context = make_context(RunConfig())

    assert FileBatch((str(doomed),), "old downloads").run(context) is True

    assert not doomed.exists()
    assert kept.exists()


def test_file_batch_dry_run(make_context, home, caplog):
    caplog.set_level("INFO", logger="devsweep")
    path = write_file(home / ".DS_Store")
    context = make_context(RunConfig(dry_run=True))

    FileBatch((str(path),), ".DS_Store files").run(context)

    assert path.exists()
    assert "[DRY RUN] Would delete 1 .DS_Store files" in caplog.text


def test_file_batch_treats_vanished_paths_as_removed(make_context, home):
    context = make_context(RunConfig())
    assert FileBatch((str(home / "gone"),), "ghost files").run(context) is True


def test_file_batch_reports_partial_failure(make_context, home, monkeypatch):
    first = write_file(home / "a.txt")
    second = write_file(home / "b.txt")
    real_unlink = os.unlink

    def unlink(path, *args, **kwargs):
        if str(path) == str(second):
            raise PermissionError(13, "Permission denied", str(path))
        real_unlink(path, *args, **kwargs)

    monkeypatch.setattr(os, "unlink", unlink)
    context = make_context(RunConfig())

    with pytest.raises(OperationFailedError, match="Failed to delete 1 of 2 text files"):
        FileBatch((str(first), str(second)), "text files").run(context)
    assert not first.exists()


def test_contents_only_partial_failure_records_what_went(make_context, home, tmp_path, monkeypatch):
    scratch = home / "scratch"
    gone = write_file(scratch / "a.txt")
    stuck = write_file(scratch / "b.txt")
    real_unlink = os.unlink

    def unlink(path, *args, **kwargs):
        if str(path) == str(stuck):
            raise PermissionError(13, "Permission denied", str(path))
        real_unlink(path, *args, **kwargs)

    monkeypatch.setattr(os, "unlink", unlink)
    context = make_context(RunConfig())

    with pytest.raises(OperationFailedError, match="1 entries could not be removed"):
        clean_directory(CleanupTarget(str(scratch), "scratch", contents_only=True), context)

    assert not gone.exists()
    assert stuck.exists()
    assert "Partly cleaned scratch: removed 1 entries" in (tmp_path / "run.log").read_text()


class FakeRunner:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def __call__(self, argv, cwd=None, timeout=None):
        self.calls.append((tuple(argv), cwd))
        code = 1 if tuple(argv) in self.failing else 0
        return CommandResult(tuple(argv), code, "", "boom" if code else "")


def test_tool_command_dry_run_runs_only_status(make_context, monkeypatch, caplog):
    caplog.set_level("INFO", logger="devsweep")
    runner = FakeRunner()
    monkeypatch.setattr(targets, "run_command", runner)
    command = tool_command("Docker cleanup", ["docker", "image", "prune", "-f"],
                           status=("docker", "system", "df"))

    assert command.run(make_context(RunConfig(dry_run=True))) is False

    assert runner.calls == [(("docker", "system", "df"), None)]
    assert "[DRY RUN] Would run: docker image prune -f" in caplog.text


def test_tool_command_runs_every_step(make_context, monkeypatch, tmp_path):
    runner = FakeRunner()
    monkeypatch.setattr(targets, "run_command", runner)
    command = tool_command("brew cleanup", ["brew", "cleanup", "-s"], ["brew", "autoremove"])

    assert command.run(make_context(RunConfig())) is True

    assert [argv for argv, cwd in runner.calls] == [("brew", "cleanup", "-s"), ("brew", "autoremove")]
    assert "Ran brew cleanup" in (tmp_path / "run.log").read_text()


def test_tool_command_failure_does_not_stop_later_steps(make_context, monkeypatch):
    runner = FakeRunner(failing=[("docker", "volume", "prune", "-f")])
    monkeypatch.setattr(targets, "run_command", runner)
    command = tool_command(
        "Docker cleanup",
        ["docker", "volume", "prune", "-f"],
        ["docker", "builder", "prune", "-f"],
    )

    with pytest.raises(OperationFailedError, match="partly failed: docker volume prune -f \\(boom\\)"):
        command.run(make_context(RunConfig()))
    assert len(runner.calls) == 2


def test_tool_command_total_failure(make_context, monkeypatch):
    runner = FakeRunner(failing=[("yarn", "cache", "clean")])
    monkeypatch.setattr(targets, "run_command", runner)

    with pytest.raises(OperationFailedError, match="yarn cache clean failed"):
        tool_command("yarn cache clean", ["yarn", "cache", "clean"]).run(make_context(RunConfig()))


def test_tool_command_requires_its_executables():
    command = tool_command("Docker cleanup", ["docker", "image", "prune"], ["docker", "volume", "prune"],
                           status=("docker", "system", "df"))
    assert command.requires == ("docker",)
