from __future__ import annotations

import logging
import os
import pathlib
import time
from typing import Any, Dict, Optional

import orjson

from .engine.eval import EvalWeights
from .engine.search import DEFAULT_DEPTH, SearchConfig

CONFIG_HOME = pathlib.Path(os.path.expanduser("~/.simple_othello"))
CONFIG_PATH = CONFIG_HOME / "config.toml"
DEFAULTS_PATH = pathlib.Path(__file__).resolve().parent / "data" / "defaults.toml"

AI_COLORS = ("black", "white", "both", "none")


def _parse_toml(path: pathlib.Path) -> Dict[str, Any]:
    # Parse TOML config; prefer stdlib tomllib (3.11+), else tomli (added as dep)
    try:
        import tomllib  # type: ignore[attr-defined]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]
    with open(path, "rb") as f:
        return tomllib.load(f)


def ensure_config(path: pathlib.Path = CONFIG_PATH) -> bool:
    """Create the user config from the packaged defaults; True if it was created."""
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULTS_PATH.read_text(encoding="utf-8"), encoding="utf-8")
    return True


def load_defaults() -> Dict[str, Any]:
    return _parse_toml(DEFAULTS_PATH)


def load_config(path: Optional[pathlib.Path] = None) -> Dict[str, Any]:
    """Load the user config layered over the packaged defaults.

    A missing file yields the defaults. A malformed file raises ValueError.
    """
    cfg = load_defaults()
    path = CONFIG_PATH if path is None else pathlib.Path(path)
    if not path.exists():
        logging.getLogger(__name__).debug("Config file not found: %s; using defaults", path)
        return cfg
    try:
        user = _parse_toml(path)
    except Exception as e:
        raise ValueError(f"Error loading config {path}: {e}") from e
    for section, values in user.items():
        if isinstance(values, dict):
            cfg.setdefault(section, {}).update(values)
        else:
            cfg[section] = values
    return cfg


def search_config_from(cfg: Dict[str, Any]) -> SearchConfig:
    engine_cfg = cfg.get("engine", {}) or {}
    eval_cfg = cfg.get("eval", {}) or {}
    depth = int(engine_cfg.get("depth", DEFAULT_DEPTH))
    weights = eval_cfg.get("weights")
    if weights is None:
        return SearchConfig(depth=depth)
    return SearchConfig(depth=depth, weights=EvalWeights.from_sequence(weights))


def ai_color_from(cfg: Dict[str, Any]) -> str:
    color = str((cfg.get("game", {}) or {}).get("ai_color", "white")).lower()
    if color not in AI_COLORS:
        raise ValueError(f"game.ai_color must be one of {AI_COLORS}, got {color!r}")
    return color


def log_level_from(cfg: Dict[str, Any]) -> int:
    name = str((cfg.get("logging", {}) or {}).get("level", "DEBUG")).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"unknown logging level: {name}")
    return level


def log_event(module: str, event: str, **kwargs) -> None:
    """Structured event logging through the central logger.

    Emits a single JSON line via the Python logging system so it reaches the
    log file configured by logging_setup.setup_logging().
    """
    payload = {"ts": time.time(), "module": module, "event": event}
    payload.update(kwargs)
    try:
        line = orjson.dumps(payload).decode("utf-8")
    except TypeError:
        logging.getLogger("event").exception("failed to log event: %s", {"module": module, "event": event})
        return
    logging.getLogger(f"event.{module}").info(line)
