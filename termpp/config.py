"""Runtime settings read from the environment.

Environment variables
---------------------
- TERMPP_SECONDS:        seconds between passes in autoplay mode (default 1).
- TERMPP_HUGE_FONT:      initial figlet font for ``--huge`` (default "standard").
- TERMPP_EDITOR:         editor for the edit key (falls back to $EDITOR, then vim).
- TERMPP_TYPE_DELAY:     base delay in seconds per typed shell character.
- TERMPP_SLIDE_DELAY:    delay in seconds between slide-in animation frames.
- TERMPP_LOG_LEVEL:      logging level name (default WARNING).
- TERMPP_LOG_FILE:       write log records to this file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


def _float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", key, raw)
        return default


@dataclass
class Settings:
    seconds: float = 1.0
    huge_font: str = "standard"
    editor: str = "vim"
    type_delay: float = 0.02
    slide_delay: float = 0.05
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    text_width: int = 80
    latex_width: int = 50

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            seconds=_float(env, "TERMPP_SECONDS", 1.0),
            huge_font=env.get("TERMPP_HUGE_FONT") or "standard",
            editor=env.get("TERMPP_EDITOR") or env.get("EDITOR") or "vim",
            type_delay=_float(env, "TERMPP_TYPE_DELAY", 0.02),
            slide_delay=_float(env, "TERMPP_SLIDE_DELAY", 0.05),
            log_level=(env.get("TERMPP_LOG_LEVEL") or "WARNING").upper(),
            log_file=env.get("TERMPP_LOG_FILE") or None,
        )
