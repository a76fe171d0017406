"""Root logger setup for the FINZ GUI.

Environment overrides (checked in this order):
  - FINZ_LOG_LEVEL / FINZ_GUI_LOG_LEVEL: explicit level name or number
  - FINZ_DEBUG_LOGGING / FINZ_DEBUG: truthy -> DEBUG
  - FINZ_LOG_FILE: also write records to this file
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_LEVEL_VARS = ("FINZ_LOG_LEVEL", "FINZ_GUI_LOG_LEVEL")
_DEBUG_VARS = ("FINZ_DEBUG_LOGGING", "FINZ_DEBUG")
_FILE_VAR = "FINZ_LOG_FILE"
_TRUTHY = frozenset({"1", "true", "yes", "on"})

# Third-party loggers that flood DEBUG output (font cache scans, PNG chunks).
_NOISY_LOGGERS = ("matplotlib", "PIL")


def _parse_level(text: str) -> Optional[int]:
    text = text.strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def _first_env_level(names: Iterable[str]) -> Optional[int]:
    for name in names:
        raw = os.environ.get(name)
        if raw:
            level = _parse_level(raw)
            if level is not None:
                return level
    return None


def _env_level() -> Optional[int]:
    level = _first_env_level(_LEVEL_VARS)
    if level is not None:
        return level
    for name in _DEBUG_VARS:
        if (os.environ.get(name) or "").strip().lower() in _TRUTHY:
            return logging.DEBUG
    return None


def _attach_file_handler(root: logging.Logger) -> None:
    path = (os.environ.get(_FILE_VAR) or "").strip()
    if not path:
        return
    target = os.path.abspath(path)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
    root.addHandler(handler)


def _quiet_third_party() -> None:
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_root(default_level: int | str = logging.INFO) -> int:
    """Install the console format once and return the effective root level."""
    if isinstance(default_level, str):
        fallback = _parse_level(default_level) or logging.INFO
    else:
        fallback = int(default_level)
    pinned = _env_level()
    effective = pinned if pinned is not None else fallback

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=_FORMAT, datefmt=_DATEFMT)
    _attach_file_handler(root)
    root.setLevel(effective)
    _quiet_third_party()
    return effective


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Follow the settings dialog's debug toggle unless the environment pins a level."""
    pinned = _env_level()
    if pinned is not None:
        level = pinned
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


def env_requests_debug() -> bool:
    """True when the environment pins DEBUG (or a lower level)."""
    pinned = _env_level()
    return pinned is not None and pinned <= logging.DEBUG
