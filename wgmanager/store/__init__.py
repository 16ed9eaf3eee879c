#!/usr/bin/env python3
#
# wgmanager/store/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Credential storage for the bearer token and last-used username."""

from .base import ACCESS_TOKEN_KEY, USERNAME_KEY, CredentialStore, MemoryCredentialStore
from .file import FileCredentialStore
from .vault import Vault

__all__ = [
	"ACCESS_TOKEN_KEY",
	"USERNAME_KEY",
	"CredentialStore",
	"FileCredentialStore",
	"MemoryCredentialStore",
	"Vault",
]
