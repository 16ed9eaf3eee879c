#!/usr/bin/env python3
#
# wgmanager/utils/log.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ANSI color codes for log levels (if TTY)
_LOG_COLORS = {
	"DEBUG": "\033[36m",    # Cyan
	"INFO": "\033[32m",     # Green
	"WARNING": "\033[33m",  # Yellow
	"ERROR": "\033[31m",    # Red
	"CRITICAL": "\033[35m", # Magenta
}
_RESET = "\033[0m"


class _ColoredFormatter(logging.Formatter):
	"""Formatter that colors the level name on a TTY."""
	
	def format(self, record):
		orig_levelname = record.levelname
		color = _LOG_COLORS.get(orig_levelname)
		if color:
			record.levelname = f"{color}{orig_levelname:<8}{_RESET}"
		else:
			record.levelname = f"{orig_levelname:<8}"
		try:
			return super().format(record)
		finally:
			record.levelname = orig_levelname


def setup_logging(log_level: str = "INFO", *, stream=None) -> None:
	"""Install a single handler on the root logger."""
	stream = stream or sys.stderr
	level = getattr(logging, log_level.upper(), logging.INFO)

	if stream.isatty():
		formatter: logging.Formatter = _ColoredFormatter(
			fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
			datefmt=DATE_FORMAT,
		)
	else:
		formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

	# force=True removes any pre-existing handlers
	logging.basicConfig(level=level, handlers=[logging.StreamHandler(stream)], force=True)
	for handler in logging.root.handlers:
		handler.setFormatter(formatter)

	# Quiet down noisy third-party libraries
	for name in ("httpcore", "httpx", "hpack"):
		logging.getLogger(name).setLevel(logging.WARNING)
