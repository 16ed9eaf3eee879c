#!/usr/bin/env python3
#
# wgmanager/api/client.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Async HTTP client for the WireGuard management API."""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from . import endpoints
from .errors import (
	DecodingError,
	InvalidResponseError,
	InvalidURLError,
	NetworkError,
	NoDataError,
	ServerError,
	UnauthorizedError,
)
from ..models import (
	ErrorDetail,
	LoginRequest,
	Peer,
	PeerConfig,
	PeerCreate,
	PeerStatistics,
	PeerToggleResult,
	PeerUpdate,
	ServerStatistics,
	TokenResponse,
	User,
)
from ..store import ACCESS_TOKEN_KEY, USERNAME_KEY, CredentialStore

_log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 30.0

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_TOKEN = TypeAdapter(TokenResponse)
_USER = TypeAdapter(User)
_PEER = TypeAdapter(Peer)
_PEER_LIST = TypeAdapter(list[Peer])
_TOGGLE = TypeAdapter(Union[Peer, PeerToggleResult])
_CONFIG = TypeAdapter(PeerConfig)
_PEER_STATS = TypeAdapter(PeerStatistics)
_SERVER_STATS = TypeAdapter(ServerStatistics)


def _validate_base_url(base_url: Optional[str]) -> str:
	"""Return the normalized base URL or raise :class:`InvalidURLError`."""
	if not base_url or not base_url.strip():
		raise InvalidURLError()
	try:
		url = httpx.URL(base_url.strip())
	except (httpx.InvalidURL, TypeError, ValueError) as exc:
		raise InvalidURLError() from exc
	if url.scheme not in ("http", "https") or not url.host:
		raise InvalidURLError()
	return str(url).rstrip("/")


def _error_detail(resp: httpx.Response) -> Optional[str]:
	"""Extract ``detail`` from an error body, or None if it is not there."""
	if not resp.content:
		return None
	try:
		detail = ErrorDetail.model_validate_json(resp.content).detail
	except ValidationError:
		return None
	return detail or None


class APIClient:
	"""Typed client for the management API.

	The only component that performs network I/O. Requests carry the bearer
	token from the credential store; a missing token fails with
	:class:`UnauthorizedError` before anything is sent, and a 401 response
	removes the stored token.
	"""

	def __init__(
		self,
		base_url: Optional[str],
		store: CredentialStore,
		*,
		timeout: float = DEFAULT_TIMEOUT,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	):
		self.base_url = _validate_base_url(base_url)
		self.store = store
		self.timeout = timeout
		self._transport = transport
		self._http: Optional[httpx.AsyncClient] = None

	async def __aenter__(self) -> "APIClient":
		self._client()
		return self

	async def __aexit__(self, *args) -> None:
		await self.aclose()

	async def aclose(self) -> None:
		if self._http is not None:
			await self._http.aclose()
			self._http = None

	def _client(self) -> httpx.AsyncClient:
		if self._http is None or self._http.is_closed:
			self._http = httpx.AsyncClient(
				base_url=self.base_url,
				timeout=self.timeout,
				transport=self._transport,
				follow_redirects=False,
			)
		return self._http

	# ------------------------------------------------------------------
	# Request plumbing
	# ------------------------------------------------------------------

	def _auth_headers(self) -> dict[str, str]:
		token = self.store.get(ACCESS_TOKEN_KEY)
		if not token:
			_log.debug("No access token stored, refusing authenticated request")
			raise UnauthorizedError()
		return {"Authorization": f"Bearer {token}"}

	async def _send(
		self,
		method: str,
		path: str,
		*,
		headers: Optional[dict[str, str]] = None,
		json: Any = None,
		data: Optional[dict[str, str]] = None,
	) -> httpx.Response:
		try:
			resp = await self._client().request(method, path, headers=headers, json=json, data=data)
		except httpx.HTTPError as exc:
			_log.warning("%s %s failed: %s", method, path, exc)
			raise NetworkError(exc) from exc
		_log.debug("%s %s -> %d", method, path, resp.status_code)
		return resp

	async def _request(
		self,
		method: str,
		path: str,
		*,
		json: Any = None,
	) -> httpx.Response:
		"""Send an authenticated request and classify the status code."""
		headers = self._auth_headers()
		resp = await self._send(method, path, headers=headers, json=json)
		self._check(resp)
		return resp

	def _check(self, resp: httpx.Response, *, fallback: Optional[str] = None) -> None:
		"""Raise the classified error for a non-2xx response."""
		status = resp.status_code
		if 200 <= status < 300:
			return
		if status == 401:
			_log.warning("Server rejected credentials (401), clearing stored token")
			self.store.delete(ACCESS_TOKEN_KEY)
			raise UnauthorizedError()
		if 400 <= status < 600:
			detail = _error_detail(resp)
			if detail is not None:
				raise ServerError(detail)
			if fallback is not None:
				raise ServerError(fallback.format(code=status))
			if status < 500:
				raise ServerError(f"Client error: {status}")
			raise ServerError(f"Server error: {status}")
		_log.warning("Unexpected HTTP status %d from %s", status, resp.request.url)
		raise InvalidResponseError()

	@staticmethod
	def _decode(resp: httpx.Response, adapter: TypeAdapter[T]) -> T:
		if not resp.content.strip():
			raise NoDataError()
		try:
			return adapter.validate_json(resp.content)
		except ValidationError as exc:
			_log.warning("Cannot decode response from %s: %s", resp.request.url, exc.errors()[:1])
			raise DecodingError(exc) from exc

	@staticmethod
	def _expect_status(resp: httpx.Response, expected: int) -> None:
		if resp.status_code != expected:
			raise ServerError(f"Unexpected status: {resp.status_code}")

	# ------------------------------------------------------------------
	# Authentication
	# ------------------------------------------------------------------

	async def login(self, username: str, password: str) -> str:
		"""Exchange credentials for a bearer token and persist it."""
		form = LoginRequest(username=username, password=password)
		resp = await self._send(
			"POST",
			endpoints.LOGIN,
			headers={"Content-Type": _FORM_CONTENT_TYPE},
			data=form.form_data(),
		)
		self._check(resp, fallback="HTTP {code}")
		token = self._decode(resp, _TOKEN)

		self.store.set(ACCESS_TOKEN_KEY, token.access_token)
		self.store.set(USERNAME_KEY, form.username)
		_log.info("Logged in as %s", form.username)
		return token.access_token

	def logout(self) -> None:
		"""Forget local credentials. The server keeps no session to end."""
		self.store.delete(ACCESS_TOKEN_KEY)
		self.store.delete(USERNAME_KEY)
		_log.info("Local credentials cleared")

	def has_token(self) -> bool:
		return bool(self.store.get(ACCESS_TOKEN_KEY))

	async def get_current_user(self) -> User:
		resp = await self._request("GET", endpoints.ME)
		return self._decode(resp, _USER)

	# ------------------------------------------------------------------
	# Peers
	# ------------------------------------------------------------------

	async def get_peers(self) -> list[Peer]:
		resp = await self._request("GET", endpoints.PEERS)
		return self._decode(resp, _PEER_LIST)

	async def get_peer(self, peer_id: int) -> Peer:
		resp = await self._request("GET", endpoints.peer(peer_id))
		return self._decode(resp, _PEER)

	async def create_peer(
		self,
		name: str,
		description: Optional[str] = None,
		device_name: Optional[str] = None,
		device_identifier: Optional[str] = None,
	) -> Peer:
		"""Create a peer; the server assigns id, keys and address."""
		body = PeerCreate(
			name=name,
			description=description,
			device_name=device_name,
			device_identifier=device_identifier,
		)
		resp = await self._request("POST", endpoints.PEERS, json=body.to_json())
		self._expect_status(resp, 201)
		peer = self._decode(resp, _PEER)
		_log.info("Created peer %d (%s)", peer.id, peer.name)
		return peer

	async def update_peer(
		self,
		peer_id: int,
		*,
		name: Optional[str] = None,
		description: Optional[str] = None,
		is_enabled: Optional[bool] = None,
		device_name: Optional[str] = None,
	) -> Peer:
		"""PATCH a peer. Arguments left as None are not sent."""
		supplied = {
			key: value
			for key, value in (
				("name", name),
				("description", description),
				("is_enabled", is_enabled),
				("device_name", device_name),
			)
			if value is not None
		}
		body = PeerUpdate(**supplied)
		resp = await self._request("PATCH", endpoints.peer(peer_id), json=body.to_json())
		return self._decode(resp, _PEER)

	async def delete_peer(self, peer_id: int) -> None:
		resp = await self._request("DELETE", endpoints.peer(peer_id))
		self._expect_status(resp, 204)
		_log.info("Deleted peer %d", peer_id)

	async def toggle_peer(self, peer_id: int) -> Union[Peer, PeerToggleResult]:
		"""Flip the enabled flag server-side.

		Returns the updated Peer, or a PeerToggleResult on servers that only
		report the new state.
		"""
		resp = await self._request("POST", endpoints.peer_toggle(peer_id))
		return self._decode(resp, _TOGGLE)

	async def get_peer_config(self, peer_id: int) -> PeerConfig:
		resp = await self._request("GET", endpoints.peer_config(peer_id))
		return self._decode(resp, _CONFIG)

	# ------------------------------------------------------------------
	# Statistics
	# ------------------------------------------------------------------

	async def get_peer_stats(self, peer_id: int) -> PeerStatistics:
		resp = await self._request("GET", endpoints.peer_stats(peer_id))
		return self._decode(resp, _PEER_STATS)

	async def get_server_stats(self) -> ServerStatistics:
		resp = await self._request("GET", endpoints.SERVER_STATS)
		return self._decode(resp, _SERVER_STATS)

	# ------------------------------------------------------------------
	# Health
	# ------------------------------------------------------------------

	async def health_check(self) -> bool:
		"""Unauthenticated liveness probe. Never raises."""
		try:
			resp = await self._client().get(endpoints.HEALTH)
		except httpx.HTTPError as exc:
			_log.info("Health check failed: %s", exc)
			return False
		return resp.status_code == 200
