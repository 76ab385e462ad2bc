#!/usr/bin/env python3
"""
Entry point for the Calculator application.

    python main.py

Environment:
    CALC_LOG_LEVEL  logging level name (default INFO)
    CALC_LOG_FILE   optional path of a rotating log file
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Ensure the repo root is on sys.path so `backend` / `frontend` import when run as a script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frontend.gui import CalculatorGUI  # noqa: E402

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level_name=None, log_file=None):
    """Configure root logging from arguments or CALC_LOG_LEVEL / CALC_LOG_FILE."""
    level_name = (level_name or os.getenv("CALC_LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    log_file = log_file or os.getenv("CALC_LOG_FILE")

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return root  # already configured

    fmt = logging.Formatter(LOG_FORMAT)

    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    root.addHandler(sh)

    if log_file:
        fh = RotatingFileHandler(log_file, maxBytes=512_000, backupCount=2, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)

    return root


def main():
    setup_logging()
    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
