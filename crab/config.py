"""User configuration and logging setup.

Configuration is read from a JSON file in the platform's config directory.
Everything in it is optional; a missing or broken file means defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    return Path(platformdirs.user_config_dir(EditorConstants.APP_NAME)) / EditorConstants.CONFIG_FILENAME


def default_log_path() -> Path:
    return Path(platformdirs.user_log_dir(EditorConstants.APP_NAME)) / EditorConstants.LOG_FILENAME


@dataclass
class EditorConfig:
    log_level: str = EditorConstants.DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    # Lines lose trailing whitespace on load unless this is turned off
    strip_trailing_whitespace: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        """Build a config from parsed JSON, skipping unknown or mistyped keys."""
        config = cls()
        expected = {
            "log_level": (str,),
            "log_file": (str, type(None)),
            "strip_trailing_whitespace": (bool,),
        }
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if not isinstance(value, expected[f.name]):
                logger.warning(f"Ignoring config key {f.name!r}: unexpected value {value!r}")
                continue
            setattr(config, f.name, value)
        return config


def load_config(path: Optional[Path] = None) -> EditorConfig:
    """Load the configuration file.

    Args:
        path: Config file to read. Defaults to the platform config location.

    Returns:
        The parsed config, or defaults if the file is absent or unreadable.
    """
    path = path or default_config_path()
    if not path.exists():
        return EditorConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return EditorConfig()

    if not isinstance(data, dict):
        logger.warning("Config file has invalid format (not a dict), ignoring")
        return EditorConfig()

    return EditorConfig.from_dict(data)


def configure_logging(config: EditorConfig) -> logging.Handler:
    """Send the ``crab`` loggers to a log file.

    The terminal is owned by the editor, so nothing is ever logged to a
    stream. If the log file cannot be opened, records are dropped.
    """
    root = logging.getLogger(EditorConstants.APP_NAME)
    level = logging.getLevelName(config.log_level.upper())
    root.setLevel(level if isinstance(level, int) else logging.WARNING)
    root.propagate = False

    log_path = Path(config.log_file) if config.log_file else default_log_path()
    handler: logging.Handler
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding='utf-8')
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    except OSError:
        handler = logging.NullHandler()

    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    return handler
