"""Project-wide constants for convenient reuse."""

from __future__ import annotations

import os
import pathlib
import sys
from typing import Final

from dialog_lifecycle.utils.env_loader import load_project_env

# Ensure .env is loaded exactly once at import time for the whole project
if "pytest" not in sys.modules:
    load_project_env()


# Repository root resolved relative to this file (utils/constant.py → package → repo)
REPO_ROOT: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2]

# Default path of the dotenv file containing runtime overrides
ENV_FILE: Final[pathlib.Path] = REPO_ROOT / ".env"

# Default modal width when the caller does not pass one
DEFAULT_MODAL_WIDTH: Final[int] = int(os.getenv("MODAL_DEFAULT_WIDTH", "710"))

# Settle delay between the close request and teardown (matches the exit transition)
CLOSE_DELAY_SEC: Final[float] = float(os.getenv("MODAL_CLOSE_DELAY_SEC", "0.3"))

# Delay before closing after a matching form-success, long enough to read the notice
FORM_SUCCESS_CLOSE_DELAY_SEC: Final[float] = float(
    os.getenv("MODAL_FORM_SUCCESS_CLOSE_DELAY_SEC", "1.5")
)

# Key code that dismisses the modal when a keyup bubbles to the wrapper (ESC)
ESC_KEY_CODE: Final[int] = int(os.getenv("MODAL_ESC_KEY_CODE", "27"))

# Logging configuration
DIALOG_LOG_LEVEL: Final[str] = os.getenv("DIALOG_LOG_LEVEL", "INFO").upper()

# Child events re-published across the modal's scope boundary
PUBLISHED_EVENTS: Final[tuple[str, ...]] = (
    "redirect-requested",
    "data-changed",
    "update-header",
    "grid-refresh-requested",
)
