#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging setup for the installer.

Records go to stdout and, optionally, to an append-only log file. Each line
carries a per-level symbol and an optional prefix such as "[WINGS-SETUP]".
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from wings_setup.config_models import SYMBOLS_DEFAULT

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_FORMAT = "{log_prefix}%(asctime)s - %(levelname)s - %(symbol)s %(message)s"

LEVEL_SYMBOL_KEYS = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "critical",
}


class SymbolFormatter(logging.Formatter):
    """
    Exposes a `symbol` attribute, looked up by record level, to the format
    string.
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        validate=True,
        symbols: Optional[Dict[str, str]] = None,
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def format(self, record):
        key = LEVEL_SYMBOL_KEYS.get(record.levelno)
        record.symbol = self.symbols.get(key, "") if key else ""
        return super().format(record)


def _build_handlers(log_file: Optional[str], log_to_console: bool) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if log_file:
        log_file_path = Path(log_file)
        try:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
        except OSError as e:
            print(f"Warning: Could not open log file {log_file}: {e}", file=sys.stderr)
    if log_to_console or not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))
    return handlers


def _resolve_format(log_format_str: Optional[str], log_prefix: Optional[str]) -> str:
    prefix = f"{log_prefix.strip()} " if log_prefix and log_prefix.strip() else ""
    template = log_format_str or DEFAULT_LOG_FORMAT
    if "{log_prefix}" in template:
        return template.format(log_prefix=prefix)
    return prefix + template


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Replaces the root logger's handlers with freshly configured ones.

    Parameters:
    log_level: int
        Root logger level.
    log_file: Optional[str]
        Also append records to this file. A file that cannot be opened is
        reported on stderr and skipped.
    log_to_console: bool
        Log to stdout. Forced on when no file handler could be created.
    log_format_str: Optional[str]
        Custom format string; may contain a `{log_prefix}` placeholder.
    log_prefix: Optional[str]
        String put in front of every record.
    symbols: Optional[Dict[str, str]]
        Symbol per level name, SYMBOLS_DEFAULT when omitted.
    """
    final_format_str = _resolve_format(log_format_str, log_prefix)
    formatter = SymbolFormatter(fmt=final_format_str, datefmt=DATE_FORMAT, symbols=symbols)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in _build_handlers(log_file, log_to_console):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. Format: '{final_format_str}'"
    )
