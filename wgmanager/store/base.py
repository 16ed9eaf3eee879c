#!/usr/bin/env python3
#
# wgmanager/store/base.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Credential store contract and the in-memory implementation."""

from __future__ import annotations

import threading
from typing import Optional, Protocol, runtime_checkable

ACCESS_TOKEN_KEY = "access_token"
USERNAME_KEY = "username"


@runtime_checkable
class CredentialStore(Protocol):
	"""Opaque key-value slot for the bearer token and last-used username."""

	def get(self, key: str) -> Optional[str]:
		...

	def set(self, key: str, value: str) -> None:
		...

	def delete(self, key: str) -> None:
		...


class MemoryCredentialStore:
	"""Process-local store. Nothing survives a restart."""

	def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
		self._items: dict[str, str] = dict(initial or {})
		self._lock = threading.Lock()

	def get(self, key: str) -> Optional[str]:
		with self._lock:
			return self._items.get(key)

	def set(self, key: str, value: str) -> None:
		with self._lock:
			self._items[key] = value

	def delete(self, key: str) -> None:
		with self._lock:
			self._items.pop(key, None)

	def clear(self) -> None:
		with self._lock:
			self._items.clear()

	def __contains__(self, key: object) -> bool:
		with self._lock:
			return key in self._items
