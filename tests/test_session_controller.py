#!/usr/bin/env python3
#
# tests/test_session_controller.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Tests for SessionController against the fake management API."""

from __future__ import annotations

import asyncio

import pytest

from wgmanager.controllers import SessionController
from wgmanager.store import ACCESS_TOKEN_KEY, USERNAME_KEY, FileCredentialStore, Vault

from .conftest import make_client
from .fakeapi import PASSWORD, TOKEN, USERNAME, total_hits


class TestStartup:

	def test_without_token(self, fake_api, anon_client, store):
		session = SessionController(anon_client, store)

		assert session.is_authenticated is False
		assert session.current_user is None
		assert total_hits(fake_api) == 0

	def test_with_token_outside_event_loop(self, fake_api, client, authed_store):
		session = SessionController(client, authed_store)

		assert session.is_authenticated is True
		assert session.current_user is None
		assert total_hits(fake_api) == 0

	@pytest.mark.asyncio
	async def test_with_token_fetches_user_in_background(self, fake_api, client, authed_store):
		session = SessionController(client, authed_store)
		assert session.is_authenticated is True

		await session.restore()

		assert session.current_user is not None
		assert session.current_user.username == USERNAME
		assert fake_api.state.hits[("GET", "/api/auth/me")] == 1

	@pytest.mark.asyncio
	async def test_background_fetch_failure_is_not_surfaced(self, fake_api, client, authed_store):
		fake_api.state.failures[("GET", "/api/auth/me")] = (500, {"detail": "boom"})
		session = SessionController(client, authed_store)

		await session.restore()

		assert session.is_authenticated is True
		assert session.current_user is None
		assert session.error_message is None


class TestLogin:

	@pytest.mark.asyncio
	async def test_success(self, fake_api, anon_client, store):
		session = SessionController(anon_client, store)
		snapshots = []
		session.subscribe(snapshots.append)

		ok = await session.login(USERNAME, PASSWORD)

		assert ok is True
		assert session.is_authenticated is True
		assert session.current_user.email == "admin@example.com"
		assert session.is_loading is False
		assert session.error_message is None
		assert store.get(ACCESS_TOKEN_KEY) == TOKEN
		assert session.last_username == USERNAME
		assert snapshots[0].is_loading is True
		assert snapshots[-1].is_loading is False

	@pytest.mark.asyncio
	async def test_wrong_credentials(self, fake_api, anon_client, store):
		session = SessionController(anon_client, store)

		ok = await session.login(USERNAME, "wrong")

		assert ok is False
		assert session.is_authenticated is False
		assert session.error_message
		assert session.is_loading is False
		assert store.get(ACCESS_TOKEN_KEY) is None

	@pytest.mark.asyncio
	async def test_server_error_message(self, fake_api, anon_client, store):
		fake_api.state.failures[("POST", "/api/auth/token")] = (503, None)
		session = SessionController(anon_client, store)

		await session.login(USERNAME, PASSWORD)

		assert session.error_message == "HTTP 503"
		assert session.is_authenticated is False

	@pytest.mark.asyncio
	async def test_blank_username_is_rejected_locally(self, fake_api, anon_client, store):
		session = SessionController(anon_client, store)

		ok = await session.login("   ", PASSWORD)

		assert ok is False
		assert session.error_message == "Username is required"
		assert total_hits(fake_api) == 0

	@pytest.mark.asyncio
	async def test_error_cleared_on_retry(self, fake_api, anon_client, store):
		session = SessionController(anon_client, store)
		await session.login(USERNAME, "wrong")
		assert session.error_message

		await session.login(USERNAME, PASSWORD)

		assert session.error_message is None
		assert session.is_authenticated is True


class TestLogout:

	@pytest.mark.asyncio
	async def test_logout_is_local(self, fake_api, client, authed_store):
		session = SessionController(client, authed_store)
		await session.restore()
		authed_store.set(USERNAME_KEY, USERNAME)
		hits_before = total_hits(fake_api)

		session.logout()

		assert session.is_authenticated is False
		assert session.current_user is None
		assert authed_store.get(ACCESS_TOKEN_KEY) is None
		assert authed_store.get(USERNAME_KEY) is None
		assert total_hits(fake_api) == hits_before

	@pytest.mark.asyncio
	async def test_logout_cancels_pending_user_fetch(self, fake_api, client, authed_store):
		session = SessionController(client, authed_store)

		session.logout()
		await session.restore()
		await asyncio.sleep(0)

		assert session.is_authenticated is False
		assert session.current_user is None
		assert fake_api.state.hits[("GET", "/api/auth/me")] == 0

	@pytest.mark.asyncio
	async def test_late_user_fetch_is_ignored_once_token_is_gone(self, fake_api, client, authed_store, monkeypatch):
		fetch = client.get_current_user

		async def fetch_then_lose_token():
			user = await fetch()
			authed_store.delete(ACCESS_TOKEN_KEY)
			return user

		monkeypatch.setattr(client, "get_current_user", fetch_then_lose_token)
		session = SessionController(client, authed_store)

		await session.restore()

		assert fake_api.state.hits[("GET", "/api/auth/me")] == 1
		assert session.current_user is None


class TestUnreadableCredentials:

	def test_token_under_other_secret_key_is_not_a_session(self, fake_api, tmp_path):
		path = tmp_path / "credentials.json"
		FileCredentialStore(path, Vault("key-a", iterations=1_000)).set(ACCESS_TOKEN_KEY, TOKEN)
		reopened = FileCredentialStore(path, Vault("key-b", iterations=1_000))

		session = SessionController(make_client(fake_api, reopened), reopened)

		assert session.is_authenticated is False
		assert total_hits(fake_api) == 0
