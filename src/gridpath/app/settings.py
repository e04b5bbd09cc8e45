# src/gridpath/app/settings.py
#!/usr/bin/env python3
"""
Viewer settings.

Resolution order (later wins):
    defaults -> environment (GRIDPATH_ROWS, GRIDPATH_COLS, GRIDPATH_ALGO,
                             GRIDPATH_SPEED, GRIDPATH_LOG_LEVEL)
             -> command line (--rows=, --cols=, --algo=, --speed=, --log-level=)
"""

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from gridpath.core.algorithms import Algorithm
from gridpath.core.grid import DEFAULT_COLS, DEFAULT_ROWS
from gridpath.core.scheduler import DEFAULT_SPEED, SPEEDS

_KEYS = ("rows", "cols", "algo", "speed", "log_level")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Settings:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    algorithm: Algorithm = Algorithm.DIJKSTRA
    speed: float = DEFAULT_SPEED
    log_level: str = "WARNING"


def _algorithm(value: str) -> Algorithm:
    # accept the display name ("A* Search") or the member name ("a_star")
    try:
        return Algorithm(value)
    except ValueError:
        try:
            return Algorithm[value.upper()]
        except KeyError:
            raise ValueError(f"unknown algorithm {value!r}") from None


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     env: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env

    raw = {}
    for key in _KEYS:
        value = env.get(f"GRIDPATH_{key.upper()}")
        if value is not None:
            raw[key] = value
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        name, value = arg[2:].split("=", 1)
        name = name.replace("-", "_").lower()
        if name in _KEYS:
            raw[name] = value

    s = Settings()
    if "rows" in raw:
        s.rows = int(raw["rows"])
    if "cols" in raw:
        s.cols = int(raw["cols"])
    if s.rows < 1 or s.cols < 1 or s.rows * s.cols < 2:
        raise ValueError(f"grid must hold at least two cells, got {s.rows}x{s.cols}")
    if "algo" in raw:
        s.algorithm = _algorithm(raw["algo"])
    if "speed" in raw:
        s.speed = float(raw["speed"].rstrip("xX"))
        if s.speed not in SPEEDS:
            raise ValueError(f"speed must be one of {sorted(SPEEDS)}, got {raw['speed']!r}")
    if "log_level" in raw:
        level = raw["log_level"].upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {_LOG_LEVELS}, got {raw['log_level']!r}")
        s.log_level = level
    return s
