#!/usr/bin/env python3
#
# tests/conftest.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Shared fixtures: fake management API, clients and credential stores."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from wgmanager.api import APIClient
from wgmanager.store import ACCESS_TOKEN_KEY, MemoryCredentialStore

from .fakeapi import BASE_URL, TOKEN, create_fake_api


def make_client(app: FastAPI, store) -> APIClient:
	return APIClient(BASE_URL, store, transport=httpx.ASGITransport(app=app))


@pytest.fixture
def fake_api() -> FastAPI:
	return create_fake_api()


@pytest.fixture
def store() -> MemoryCredentialStore:
	"""Empty store (logged out)."""
	return MemoryCredentialStore()


@pytest.fixture
def authed_store() -> MemoryCredentialStore:
	"""Store holding a valid token for the fake API."""
	return MemoryCredentialStore({ACCESS_TOKEN_KEY: TOKEN})


@pytest.fixture
def client(fake_api, authed_store) -> APIClient:
	return make_client(fake_api, authed_store)


@pytest.fixture
def anon_client(fake_api, store) -> APIClient:
	return make_client(fake_api, store)
