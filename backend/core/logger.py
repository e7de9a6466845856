# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

Handlers, levels and formats live in etc/logging.conf.  The file contains a
``%(log_file)s`` placeholder for the rotating file handler; it is replaced
with the absolute path of log/app.log before the config is applied.

Usage:
    from core.logger import logger
"""

import configparser
import logging
import logging.config
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_LOG_DIR      = _PROJECT_ROOT / "log"
_LOG_FILE     = _LOG_DIR / "app.log"
_LOGGING_CONF = _PROJECT_ROOT / "etc" / "logging.conf"

_LOG_DIR.mkdir(exist_ok=True)


def _load_config() -> configparser.RawConfigParser:
    raw = _LOGGING_CONF.read_text(encoding="utf-8")
    raw = raw.replace("%(log_file)s", str(_LOG_FILE))

    # Raw parser: format strings such as %(asctime)s must not be interpolated
    parser = configparser.RawConfigParser()
    parser.read_string(raw)
    return parser


logging.config.fileConfig(_load_config(), disable_existing_loggers=False)

logger = logging.getLogger("vacations")
