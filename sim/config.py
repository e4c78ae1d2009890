"""
Configuration loading.

Purpose: Load YAML presets and the maze catalogue, validate playback
    settings before any search starts.

Inputs:
    - config/<preset>.yaml
    - config/mazes.yaml or a maze text file

Outputs:
    - Config dictionary with defaults filled in
    - Maze rows (list of strings)

Params:
    config_dir: Path - directory holding the YAML files (default: config/)
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, List, Optional

from sim.playback import validate_interval


CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

DEFAULTS = {
    "playback": {
        "interval_ms": 500,
        "speed_step_ms": 50,
    },
    "render": {
        "cell_size": 20,
        "stroke_width": 2,
        "log_lines": 12,
        "log_width": 320,
        "fps": 60,
    },
    "maze": {
        "name": "classic",
        "symbols": {"wall": "x", "open": " ", "start": "s", "end": "e"},
    },
    "logging": {
        "log_dir": "data/logs",
        "enabled": True,
    },
}


class ConfigError(ValueError):
    """Raised for missing presets, unknown mazes, or invalid settings."""


def _merge(base: Dict, override: Dict) -> Dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(preset: str = "baseline", config_dir: Optional[Path] = None) -> Dict:
    """
    Load a configuration preset.

    Args:
        preset: Preset name (baseline, fast, slow)
        config_dir: Directory holding <preset>.yaml

    Returns:
        Config dictionary merged over DEFAULTS

    Raises:
        ConfigError: Preset missing or playback interval invalid
    """
    config_dir = Path(config_dir) if config_dir else CONFIG_DIR
    config_path = config_dir / f"{preset}.yaml"
    if not config_path.exists():
        raise ConfigError(f"Config preset not found: {config_path}")

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config preset {config_path} must be a mapping, got {type(loaded).__name__}")

    config = _merge(DEFAULTS, loaded)
    try:
        validate_interval(config['playback']['interval_ms'])
        validate_interval(config['playback']['speed_step_ms'])
    except ValueError as e:
        raise ConfigError(str(e)) from e

    return config


def load_maze(name: str, config_dir: Optional[Path] = None) -> List[str]:
    """
    Load maze rows by name from mazes.yaml.

    Args:
        name: Maze name in the catalogue
        config_dir: Directory holding mazes.yaml

    Returns:
        List of maze rows

    Raises:
        ConfigError: Catalogue missing or maze unknown
    """
    config_dir = Path(config_dir) if config_dir else CONFIG_DIR
    mazes_path = config_dir / "mazes.yaml"
    if not mazes_path.exists():
        raise ConfigError(f"Maze catalogue not found: {mazes_path}")

    with open(mazes_path, 'r') as f:
        mazes = yaml.safe_load(f) or {}

    if name not in mazes:
        raise ConfigError(f"Unknown maze: {name} (available: {', '.join(sorted(mazes))})")

    rows = mazes[name]
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise ConfigError(f"Maze {name} must be a list of strings")
    return rows


def load_maze_file(path) -> List[str]:
    """Read maze rows from a text file, one row per line."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Maze file not found: {path}")
    with open(path, 'r') as f:
        rows = [line.rstrip("\r\n") for line in f]

    # Trailing blank lines only; a blank row inside the maze is left for parse() to reject
    while rows and not rows[-1]:
        rows.pop()
    return rows
