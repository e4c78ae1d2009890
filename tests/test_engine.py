"""Tests for the maze session, terminal playback and the CLI."""

import csv

import pytest

import run
from nav.grid import MalformedGridError, MissingEndpointError
from sim.engine import MazeSession, TerminalPlayback
from tools.narrator import CELEBRATION, NO_SOLUTION
from conftest import ADJACENT, WALLED_IN


def test_session_rejects_bad_grids(config):
    with pytest.raises(MissingEndpointError):
        MazeSession(["xxx", "xsx", "xxx"], "no-end", config)
    with pytest.raises(MalformedGridError):
        MazeSession(["xxx", "xs", "xex"], "ragged", config)


def test_session_solve_is_repeatable(config):
    session = MazeSession(ADJACENT, "adjacent", config)
    first = session.solve().frames
    second = session.solve().frames
    assert first == second
    assert session.solves == 2
    assert session.metrics["frames"] == 5


def test_session_logs_csv(config, tmp_path):
    config['logging']['enabled'] = True
    session = MazeSession(ADJACENT, "adjacent", config, preset="fast")
    session.solve()

    files = list((tmp_path / "logs").glob("adjacent_*.csv"))
    assert len(files) == 1
    with open(files[0], newline='') as f:
        row = next(csv.DictReader(f))
    assert row["solved"] == "1"
    assert row["preset"] == "fast"


def test_terminal_playback_solved(config):
    lines = []
    sleeps = []
    player = TerminalPlayback(MazeSession(ADJACENT, "adjacent", config), 10,
                              printer=lines.append, sleep=sleeps.append)
    assert player.run()

    assert lines == [
        "Let's start! 🚀",
        "⬆️ It's a Wall! 🚫",
        "➡️ It's a Wall! 🚫",
        "⬇️ You made it to the end! 🏆",
        CELEBRATION,
    ]
    assert len(sleeps) == 6


def test_terminal_playback_unsolved(config):
    lines = []
    player = TerminalPlayback(MazeSession(WALLED_IN, "walled", config), 10,
                              printer=lines.append, sleep=lambda s: None)
    assert not player.run()
    assert lines[-1] == NO_SOLUTION
    assert lines[-2].startswith("⚠️ Going back!")
    assert CELEBRATION not in lines


def test_terminal_playback_grid(config):
    lines = []
    player = TerminalPlayback(MazeSession(ADJACENT, "adjacent", config), 10,
                              printer=lines.append, sleep=lambda s: None, show_grid=True)
    player.run()
    assert "xxx\nxgx\nxex\nxxx" in lines


def test_cli_headless(capsys):
    assert run.main(["--maze", "adjacent", "--headless", "--interval", "1", "--no-log"]) == 0
    out = capsys.readouterr().out
    assert "You made it to the end!" in out
    assert CELEBRATION in out


def test_cli_unknown_maze(capsys):
    assert run.main(["--maze", "nope", "--no-log"]) == 2
    assert "Unknown maze" in capsys.readouterr().out


def test_cli_malformed_maze_file(tmp_path, capsys):
    path = tmp_path / "ragged.txt"
    path.write_text("xxx\nxs\nxex\n")
    assert run.main(["--maze-file", str(path), "--headless", "--no-log"]) == 2
    assert "Error" in capsys.readouterr().out


def test_cli_rejects_non_positive_interval():
    with pytest.raises(SystemExit):
        run.main(["--interval", "0"])


def test_cli_blank_row_in_maze_file(tmp_path, capsys):
    path = tmp_path / "gap.txt"
    path.write_text("xxx\nxsx\n\nxex\nxxx\n")
    assert run.main(["--maze-file", str(path), "--headless", "--no-log"]) == 2
    assert "Row 2" in capsys.readouterr().out
