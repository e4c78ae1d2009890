"""Tests for YAML presets and the maze catalogue."""

import pytest

from nav.grid import MalformedGridError, parse
from sim.config import ConfigError, load_config, load_maze, load_maze_file


@pytest.mark.parametrize("preset", ["baseline", "fast", "slow"])
def test_presets_load(preset):
    config = load_config(preset)
    assert config['playback']['interval_ms'] > 0
    assert config['render']['cell_size'] > 0
    assert set(config['maze']['symbols']) == {"wall", "open", "start", "end"}


def test_preset_overrides_defaults():
    config = load_config("fast")
    assert config['playback']['interval_ms'] == 40
    assert config['render']['stroke_width'] == 2


def test_missing_preset(tmp_path):
    with pytest.raises(ConfigError):
        load_config("nope", config_dir=tmp_path)


@pytest.mark.parametrize("interval", [0, -1, "fast", 2.5])
def test_invalid_interval(tmp_path, interval):
    (tmp_path / "bad.yaml").write_text(f"playback:\n  interval_ms: {interval}\n")
    with pytest.raises(ConfigError):
        load_config("bad", config_dir=tmp_path)


def test_classic_maze():
    rows = load_maze("classic")
    assert len(rows) == 11
    assert {len(row) for row in rows} == {30}


def test_unknown_maze():
    with pytest.raises(ConfigError):
        load_maze("does-not-exist")


def test_maze_must_be_list_of_strings(tmp_path):
    (tmp_path / "mazes.yaml").write_text("bad: 3\n")
    with pytest.raises(ConfigError):
        load_maze("bad", config_dir=tmp_path)


def test_maze_file(tmp_path):
    path = tmp_path / "tiny.txt"
    path.write_text("xxxx\nxs e\nxxxx\n\n")
    assert load_maze_file(path) == ["xxxx", "xs e", "xxxx"]


def test_missing_maze_file(tmp_path):
    with pytest.raises(ConfigError):
        load_maze_file(tmp_path / "missing.txt")


def test_blank_row_inside_maze_file_is_kept(tmp_path):
    path = tmp_path / "gap.txt"
    path.write_text("xxxx\n\nxs e\nxxxx\n")
    rows = load_maze_file(path)
    assert rows == ["xxxx", "", "xs e", "xxxx"]
    with pytest.raises(MalformedGridError):
        parse(rows)


def test_preset_must_be_a_mapping(tmp_path):
    (tmp_path / "listy.yaml").write_text("- 1\n- 2\n")
    with pytest.raises(ConfigError):
        load_config("listy", config_dir=tmp_path)
