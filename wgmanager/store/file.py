#!/usr/bin/env python3
#
# wgmanager/store/file.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""JSON-file credential store that survives process restarts."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from .vault import Vault, is_encrypted

_log = logging.getLogger(__name__)

_FILE_MODE = 0o600


class FileCredentialStore:
	"""Persist credentials in a single JSON object on disk.

	The file is re-read on every access and replaced atomically on every
	write, so the last writer wins across processes. Values are encrypted
	when a :class:`Vault` is supplied; plaintext entries written without a
	vault are still readable afterwards.
	"""

	def __init__(self, path: Path, vault: Optional[Vault] = None) -> None:
		self.path = Path(path)
		self._vault = vault
		self._lock = threading.Lock()
		if vault is None:
			_log.warning("No secret key configured, credentials are stored unencrypted in %s", self.path)

	def _load(self) -> dict[str, str]:
		try:
			raw = self.path.read_text(encoding="utf-8")
		except FileNotFoundError:
			return {}
		try:
			data = json.loads(raw) if raw.strip() else {}
		except json.JSONDecodeError:
			_log.warning("Credential file %s is corrupt, starting empty", self.path)
			return {}
		if not isinstance(data, dict):
			_log.warning("Credential file %s has unexpected layout, starting empty", self.path)
			return {}
		return {str(k): str(v) for k, v in data.items() if isinstance(v, str)}

	def _write(self, data: dict[str, str]) -> None:
		self.path.parent.mkdir(parents=True, exist_ok=True)
		fd, tmp_name = tempfile.mkstemp(prefix=".credentials-", dir=str(self.path.parent))
		try:
			with os.fdopen(fd, "w", encoding="utf-8") as fh:
				json.dump(data, fh, indent=2, sort_keys=True)
			os.chmod(tmp_name, _FILE_MODE)
			os.replace(tmp_name, self.path)
		except BaseException:
			Path(tmp_name).unlink(missing_ok=True)
			raise

	def get(self, key: str) -> Optional[str]:
		with self._lock:
			stored = self._load().get(key)
		if stored is None:
			return None
		if not is_encrypted(stored):
			return stored
		# Unreadable secrets count as absent so the caller has to log in again
		if self._vault is None:
			_log.warning("Credential %r is encrypted but no WGMANAGER_SECRET_KEY is set, ignoring it", key)
			return None
		try:
			return self._vault.decrypt(stored)
		except ValueError:
			_log.warning("Credential %r cannot be decrypted with the configured key, ignoring it", key)
			return None

	def set(self, key: str, value: str) -> None:
		stored = self._vault.encrypt(value) if self._vault else value
		with self._lock:
			data = self._load()
			data[key] = stored
			self._write(data)
		_log.debug("Stored credential %r", key)

	def delete(self, key: str) -> None:
		with self._lock:
			data = self._load()
			if key not in data:
				return
			del data[key]
			self._write(data)
		_log.debug("Deleted credential %r", key)

	def clear(self) -> None:
		with self._lock:
			self.path.unlink(missing_ok=True)
