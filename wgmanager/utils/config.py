#!/usr/bin/env python3
#
# wgmanager/utils/config.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Configuration loading and client-level defaults."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path

_log = logging.getLogger(__name__)


class ConfigValidationError(Exception):
	"""Raised when configuration is missing or invalid."""


DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_DATA_DIR = Path("~/.config/wgmanager")
CREDENTIALS_FILENAME = "credentials.json"

_ALLOWED_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Config:
	"""Resolved runtime configuration derived from env and defaults."""
	base_url: str
	data_dir: Path
	credentials_path: Path
	request_timeout: float = DEFAULT_TIMEOUT_SECONDS
	log_level: str = "INFO"
	secret_key: str = ""


def _parse_value(raw: str) -> str:
	"""Extract value, respecting quotes and stripping inline comments."""
	raw = raw.strip()
	if raw and raw[0] in ('"', "'"):
		quote = raw[0]
		end = raw.find(quote, 1)
		if end != -1:
			return raw[1:end]
	if " #" in raw:
		raw = raw.split(" #", 1)[0]
	return raw.strip()


def load_dotenv(dotenv_path: Path | None = None) -> None:
	"""Load simple KEY=VALUE pairs from settings.env in the working directory.

	Blank lines, comments and ``export`` prefixes are handled. Variables that
	are already set in the environment are never overridden.
	"""
	dotenv_path = dotenv_path or (Path.cwd() / "settings.env")
	if not dotenv_path.exists():
		return
	for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
		line = raw_line.strip()
		if not line or line.startswith("#") or "=" not in line:
			continue
		key, value = line.split("=", 1)
		key = key.strip()
		if key.startswith("export "):
			key = key[7:].strip()
		if not key:
			continue
		os.environ.setdefault(key, _parse_value(value))


def _parse_timeout(raw: str) -> float:
	try:
		timeout = float(raw)
	except ValueError as exc:
		raise ConfigValidationError(f"WGMANAGER_TIMEOUT must be a number, got {raw!r}") from exc
	if timeout <= 0:
		raise ConfigValidationError("WGMANAGER_TIMEOUT must be positive")
	return timeout


def load_config(dotenv_path: Path | None = None) -> Config:
	"""Load configuration from environment variables (optionally via settings.env)."""
	load_dotenv(dotenv_path)

	base_url = os.getenv("WGMANAGER_BASE_URL", DEFAULT_BASE_URL).strip()
	if not base_url:
		raise ConfigValidationError("WGMANAGER_BASE_URL is empty")

	timeout = _parse_timeout(os.getenv("WGMANAGER_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS)))

	data_dir = Path(os.getenv("WGMANAGER_DATA_DIR", str(DEFAULT_DATA_DIR))).expanduser().resolve()
	if data_dir.exists() and not data_dir.is_dir():
		raise ConfigValidationError(f"Path exists but is not a directory: {data_dir}")

	log_level = os.getenv("LOG_LEVEL", "INFO").upper()
	if log_level not in _ALLOWED_LEVELS:
		log_level = "INFO"

	secret_key = os.getenv("WGMANAGER_SECRET_KEY", "")

	return Config(
		base_url=base_url,
		data_dir=data_dir,
		credentials_path=data_dir / CREDENTIALS_FILENAME,
		request_timeout=timeout,
		log_level=log_level,
		secret_key=secret_key,
	)


# Global config singleton with thread-safe lazy initialization
_config: Config | None = None
_config_lock = threading.Lock()


def get_config() -> Config:
	"""Get the global config singleton (thread-safe)."""
	global _config
	if _config is None:
		with _config_lock:
			if _config is None:
				_config = load_config()
	return _config


def reset_config() -> None:
	"""Reset the cached config. Intended for tests only."""
	global _config
	with _config_lock:
		_config = None
