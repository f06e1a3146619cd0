"""Parsing module for maze configuration files.

The file is a list of KEY=VALUE lines; `#` starts a comment. WIDTH and
HEIGHT are required. SEED, START, GOAL, RESPECT_WALLS and LOG_LEVEL are
optional. Coordinates are written `x,y`.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from mazegrid import Position


REQUIRED_KEYS = ("WIDTH", "HEIGHT")
OPTIONAL_KEYS = ("SEED", "START", "GOAL", "RESPECT_WALLS", "LOG_LEVEL")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Config:
    """Parsed configuration for maze generation and path finding."""

    width: int
    height: int
    seed: Optional[int] = None
    start: Optional[Position] = None
    goal: Optional[Position] = None
    respect_walls: bool = False
    log_level: str = "WARNING"


class ConfigError(ValueError):
    """Configuration and validation error."""

    pass


def parse_bool(value: str, *, key: str) -> bool:
    """Parse a boolean from a config value."""

    v = value.strip().lower()
    if v in {"true", "1", "yes", "y", "on"}:
        return True
    if v in {"false", "0", "no", "n", "off"}:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def parse_int(value: str, *, key: str) -> int:
    """Parse an integer from a config value."""

    try:
        return int(value.strip())
    except ValueError as exc:
        msg = f"Invalid integer for {key}: {value!r}"
        raise ConfigError(msg) from exc


def parse_coord(value: str, *, key: str) -> Position:
    """Parse coordinates written as x,y."""

    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2:
        raise ConfigError(
            f"Invalid coordinate for {key}: {value!r} (expected 'x,y')"
        )
    return Position(parse_int(parts[0], key=key), parse_int(parts[1], key=key))


def read_raw(path: Path) -> Dict[str, str]:
    """Read KEY=VALUE pairs, rejecting bad syntax and unknown keys."""

    raw: Dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                stripped = line.split("#", 1)[0].strip()
                if not stripped:
                    continue
                if "=" not in stripped:
                    raise ConfigError(
                        f"Line {line_no}: Invalid syntax"
                        f" (expected KEY=VALUE)\n→ {line.rstrip()}"
                    )
                k, v = stripped.split("=", 1)
                key = k.strip().upper()
                if key not in REQUIRED_KEYS and key not in OPTIONAL_KEYS:
                    raise ConfigError(
                        f"Line {line_no}: Unknown configuration key '{key}'"
                    )
                raw[key] = v.strip()
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read"
                          f" config file: {path}: {exc}") from exc
    return raw


def read_config(path: Path) -> Config:
    """Read and validate the configuration file."""

    raw = read_raw(path)

    missing = [key for key in REQUIRED_KEYS if key not in raw]
    if missing:
        raise ConfigError(
            f"Missing required config keys: {', '.join(missing)}"
        )

    width = parse_int(raw["WIDTH"], key="WIDTH")
    height = parse_int(raw["HEIGHT"], key="HEIGHT")
    if width <= 0 or height <= 0:
        raise ConfigError("WIDTH and HEIGHT must be > 0")

    seed = parse_int(raw["SEED"], key="SEED") if "SEED" in raw else None

    points: Dict[str, Optional[Position]] = {"START": None, "GOAL": None}
    for point_key in points:
        if point_key not in raw:
            continue
        x, y = parse_coord(raw[point_key], key=point_key)
        if not (0 <= x < width and 0 <= y < height):
            raise ConfigError(
                f"{point_key} coordinates out of bounds "
                f"(0 ≤ x < WIDTH, 0 ≤ y < HEIGHT)"
            )
        points[point_key] = Position(x, y)

    respect_walls = False
    if "RESPECT_WALLS" in raw:
        respect_walls = parse_bool(raw["RESPECT_WALLS"], key="RESPECT_WALLS")

    log_level = raw.get("LOG_LEVEL", "WARNING").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid LOG_LEVEL: {log_level!r} "
            f"(expected one of {', '.join(LOG_LEVELS)})"
        )

    return Config(
        width=width,
        height=height,
        seed=seed,
        start=points["START"],
        goal=points["GOAL"],
        respect_walls=respect_walls,
        log_level=log_level,
    )
