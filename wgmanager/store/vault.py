#!/usr/bin/env python3
#
# wgmanager/store/vault.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""
Fernet-based encryption for credentials at rest (bearer token, username).

Each value is encrypted with a Fernet key derived from:
  - A random 16-byte salt (stored alongside the ciphertext)
  - The local secret key (pepper) from WGMANAGER_SECRET_KEY

Storage format:  "vault:1:<salt_hex>:<fernet_token>"

Derived keys are cached per salt, so repeated reads of the same entry only
pay the PBKDF2 cost once per process.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import os
import threading

from cryptography.fernet import Fernet, InvalidToken

_log = logging.getLogger(__name__)

_VAULT_PREFIX = "vault:1:"
_SALT_BYTES = 16
DEFAULT_ITERATIONS = 480_000


class Vault:
	"""Encrypts and decrypts single string values with a shared pepper."""

	def __init__(self, pepper: str, *, iterations: int = DEFAULT_ITERATIONS) -> None:
		if not pepper:
			raise ValueError("Vault requires a non-empty secret key")
		if iterations < 1:
			raise ValueError("iterations must be positive")
		self._pepper = pepper.encode("utf-8")
		self._iterations = iterations
		self._keys: dict[bytes, Fernet] = {}
		self._lock = threading.Lock()

	def _fernet(self, salt: bytes) -> Fernet:
		with self._lock:
			cached = self._keys.get(salt)
			if cached is not None:
				return cached
		dk = hashlib.pbkdf2_hmac("sha256", self._pepper, salt, iterations=self._iterations)
		# Fernet requires url-safe base64-encoded 32-byte key
		fernet = Fernet(base64.urlsafe_b64encode(dk))
		with self._lock:
			self._keys[salt] = fernet
		return fernet

	def encrypt(self, plaintext: str) -> str:
		salt = os.urandom(_SALT_BYTES)
		token = self._fernet(salt).encrypt(plaintext.encode("utf-8"))
		return f"{_VAULT_PREFIX}{salt.hex()}:{token.decode('ascii')}"

	def decrypt(self, stored: str) -> str:
		"""Decrypt a vault string. Values without the vault prefix are returned as-is."""
		if not is_encrypted(stored):
			return stored
		try:
			salt_hex, fernet_token = stored[len(_VAULT_PREFIX):].split(":", 1)
			salt = bytes.fromhex(salt_hex)
			if len(salt) != _SALT_BYTES:
				raise ValueError("Invalid salt length")
			return self._fernet(salt).decrypt(fernet_token.encode("ascii")).decode("utf-8")
		except (InvalidToken, ValueError) as exc:
			_log.error("Credential decryption failed")
			raise ValueError("Cannot decrypt stored credential, wrong WGMANAGER_SECRET_KEY?") from exc


def is_encrypted(value: str | None) -> bool:
	"""Check whether a value is vault-encrypted."""
	return bool(value and value.startswith(_VAULT_PREFIX))
