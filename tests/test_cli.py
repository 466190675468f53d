"""Tests for the command-line interface and whole runs."""

import os
import re

import pytest

from devsweep.cli import create_parser, main, parse_config, run
from devsweep.core.config import RunConfig

from conftest import ScriptedAsk, snapshot, write_file


def test_defaults():
    config, args = parse_config([])
    assert config == RunConfig(dry_run=False, verbose=False, skip_confirmation=False, downloads_age_days=30)
    assert args.only is None


def test_short_flags():
    config, _ = parse_config(["-d", "-v", "-y", "-a", "60"])
    assert config == RunConfig(dry_run=True, verbose=True, skip_confirmation=True, downloads_age_days=60)


def test_long_flags():
    config, _ = parse_config(["--dry-run", "--verbose", "--yes", "--age", "7"])
    assert config.dry_run and config.verbose and config.skip_confirmation
    assert config.downloads_age_days == 7


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "--dry-run" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["--bogus"], ["-z"], ["--age", "-1"], ["--age", "soon"], ["--only", "nope"]])
def test_bad_arguments_exit_non_zero(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_list_cleaners(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "docker:" in out
    assert "downloads:" in out


def test_parser_knows_every_cleaner():
    only = [a for a in create_parser()._actions if a.dest == "only"][0]
    assert "trash" in only.choices


@pytest.fixture
def roots(tmp_path, home):
    system_root = tmp_path / "root"
    temp_dir = tmp_path / "tmp"
    log_dir = tmp_path / "logs"
    for path in (system_root, temp_dir, log_dir):
        path.mkdir()
    return {
        "home": str(home),
        "system_root": str(system_root),
        "temp_dir": str(temp_dir),
        "log_dir": str(log_dir),
    }


def log_files(roots):
    return [os.path.join(roots["log_dir"], f) for f in os.listdir(roots["log_dir"])]


def test_dry_run_verbose_reports_and_changes_nothing(roots, home, no_tools, caplog):
    caplog.set_level("DEBUG", logger="devsweep")
    write_file(home / "Library" / "Caches" / "Google" / "Chrome" / "blob", "x" * 2048)
    write_file(home / "Downloads" / "ancient.zip", age_days=400)
    write_file(home / ".Trash" / "deleted.txt")
    before = snapshot(home)
    config, _ = parse_config(["--dry-run", "--verbose"])

    assert run(config, ask=ScriptedAsk(), **roots) == 0

    assert snapshot(home) == before
    assert "[DRY RUN] Would clean Chrome cache (2.00 KB)" in caplog.text
    assert "DRY RUN MODE" in caplog.text
    assert "This was a dry run" in caplog.text


def test_yes_with_zero_age_empties_downloads(roots, home, no_tools):
    files = [
        write_file(home / "Downloads" / "a.dmg", age_days=0.05),
        write_file(home / "Downloads" / "nested" / "b.pdf", age_days=3),
        write_file(home / "Downloads" / "c.zip", age_days=90),
    ]

    def never(question):
        raise AssertionError(f"unexpected prompt: {question}")

    config, _ = parse_config(["--yes", "--age", "0"])
    assert run(config, ask=never, **roots) == 0

    assert not any(f.exists() for f in files)


def test_missing_container_runtime_does_not_stop_the_run(roots, home, no_tools, caplog):
    caplog.set_level("INFO", logger="devsweep")
    write_file(home / ".Trash" / "deleted.txt")
    config, _ = parse_config(["--yes"])

    assert run(config, **roots) == 0

    assert "docker not installed, skipping" in caplog.text
    assert "Emptying Trash" in caplog.text
    assert not (home / ".Trash" / "deleted.txt").exists()


def test_live_run_writes_timestamped_log(roots, home, no_tools):
    write_file(home / "Library" / "Caches" / "Firefox" / "blob")
    config, _ = parse_config(["--yes"])

    run(config, **roots)

    [log_path] = log_files(roots)
    assert re.search(r"\.cleanup_log_\d{8}_\d{6}\.txt$", log_path)
    lines = open(log_path).read().splitlines()
    assert any(re.match(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] Cleaned Firefox cache", line) for line in lines)
    assert lines[0].endswith("Cleanup started - Mode: LIVE")
    assert lines[-1].endswith("Cleanup completed")


def test_only_runs_selected_cleaners(roots, home, no_tools, caplog):
    caplog.set_level("INFO", logger="devsweep")
    config, args = parse_config(["--yes", "--only", "trash"])

    run(config, only=args.only, **roots)

    assert "Emptying Trash" in caplog.text
    assert "Cleaning Docker" not in caplog.text


def test_failures_are_counted_not_fatal(roots, home, no_tools, monkeypatch, caplog):
    caplog.set_level("INFO", logger="devsweep")
    from devsweep.cleaners.docker import DockerCleaner

    def explode(self, context):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(DockerCleaner, "clean", explode)
    config, _ = parse_config(["--yes"])

    assert run(config, **roots) == 0

    assert "Error running cleaner 'docker': kaboom" in caplog.text
    assert "1 warnings" in caplog.text
    assert "Emptying Trash" in caplog.text


def test_unwritable_log_dir_does_not_stop_the_run(roots, home, tmp_path, no_tools, caplog):
    caplog.set_level("INFO", logger="devsweep")
    write_file(home / ".Trash" / "deleted.txt")
    roots["log_dir"] = str(tmp_path / "missing")
    config, _ = parse_config(["--yes"])

    assert run(config, **roots) == 0

    assert "Could not create log file" in caplog.text
    assert "Log file saved to" not in caplog.text
    assert not (home / ".Trash" / "deleted.txt").exists()
