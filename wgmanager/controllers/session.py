#!/usr/bin/env python3
#
# wgmanager/controllers/session.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Authentication state: login, logout and the current user."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from ..api.client import APIClient
from ..api.errors import APIError
from ..models import User
from ..store import ACCESS_TOKEN_KEY, USERNAME_KEY, CredentialStore
from .base import ObservableController
from .messages import validation_message

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
	is_authenticated: bool = False
	current_user: Optional[User] = None
	is_loading: bool = False
	error_message: Optional[str] = None


class SessionController(ObservableController[SessionState]):
	"""Mirror of the stored session.

	A stored token marks the session authenticated right away; the user
	record is fetched in the background and simply stays unset if that
	fails.
	"""

	def __init__(self, client: APIClient, store: CredentialStore) -> None:
		super().__init__(SessionState())
		self._client = client
		self._store = store
		self._restore_task: Optional[asyncio.Task] = None
		self.check_authentication()

	# Convenience accessors
	@property
	def is_authenticated(self) -> bool:
		return self.state.is_authenticated

	@property
	def current_user(self) -> Optional[User]:
		return self.state.current_user

	@property
	def is_loading(self) -> bool:
		return self.state.is_loading

	@property
	def error_message(self) -> Optional[str]:
		return self.state.error_message

	@property
	def last_username(self) -> Optional[str]:
		return self._store.get(USERNAME_KEY)

	def check_authentication(self) -> None:
		"""Derive the authenticated flag from the store and schedule the user fetch."""
		has_token = bool(self._store.get(ACCESS_TOKEN_KEY))
		self._update(is_authenticated=has_token)
		if not has_token:
			return
		try:
			loop = asyncio.get_running_loop()
		except RuntimeError:
			# No loop yet; restore() fetches the user once one is running
			return
		self._restore_task = loop.create_task(self.fetch_current_user())

	async def restore(self) -> None:
		"""Wait for (or perform) the startup user fetch."""
		if self._restore_task is not None:
			task, self._restore_task = self._restore_task, None
			await task
		elif self.state.is_authenticated and self.state.current_user is None:
			await self.fetch_current_user()

	async def fetch_current_user(self) -> Optional[User]:
		try:
			user = await self._client.get_current_user()
		except APIError as exc:
			_log.warning("Failed to fetch current user: %s", exc)
			return None
		if not self._store.get(ACCESS_TOKEN_KEY):
			# Logged out while the request was in flight
			return None
		self._update(current_user=user)
		return user

	async def login(self, username: str, password: str) -> bool:
		self._update(is_loading=True, error_message=None)
		try:
			await self._client.login(username, password)
			await self.fetch_current_user()
			self._update(is_authenticated=True)
			return True
		except APIError as exc:
			self._update(error_message=str(exc), is_authenticated=False)
			return False
		except ValidationError as exc:
			self._update(error_message=validation_message(exc), is_authenticated=False)
			return False
		finally:
			self._update(is_loading=False)

	def logout(self) -> None:
		if self._restore_task is not None:
			self._restore_task.cancel()
			self._restore_task = None
		self._client.logout()
		self._update(current_user=None, is_authenticated=False)
