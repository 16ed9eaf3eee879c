#!/usr/bin/env python3
#
# wgmanager/controllers/peers.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Peer collection state and the operations that mutate it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from ..api.client import APIClient
from ..api.errors import APIError
from ..models import Peer, PeerConfig, PeerStatistics, PeerToggleResult, ServerStatistics
from .base import ObservableController
from .messages import validation_message

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeerCollectionState:
	peers: tuple[Peer, ...] = ()
	server_stats: Optional[ServerStatistics] = None
	is_loading: bool = False
	error_message: Optional[str] = None


def _replace_by_id(peers: tuple[Peer, ...], updated: Peer) -> tuple[Peer, ...]:
	return tuple(updated if p.id == updated.id else p for p in peers)


class PeerCollectionController(ObservableController[PeerCollectionState]):
	"""Owns the cached peer list and server statistics.

	The server is authoritative: successful calls replace cached elements
	with what the server returned, failed calls leave the cache untouched
	and record ``error_message``. Peers keep server order.
	"""

	def __init__(self, client: APIClient) -> None:
		super().__init__(PeerCollectionState())
		self._client = client

	@property
	def peers(self) -> list[Peer]:
		return list(self.state.peers)

	@property
	def server_stats(self) -> Optional[ServerStatistics]:
		return self.state.server_stats

	@property
	def is_loading(self) -> bool:
		return self.state.is_loading

	@property
	def error_message(self) -> Optional[str]:
		return self.state.error_message

	def find(self, peer_id: int) -> Optional[Peer]:
		return next((p for p in self.state.peers if p.id == peer_id), None)

	def _fail(self, action: str, exc: Exception) -> None:
		message = validation_message(exc) if isinstance(exc, ValidationError) else str(exc)
		_log.warning("%s failed: %s", action, message)
		self._update(error_message=message)

	async def refresh(self) -> None:
		"""Reload the peer list and server statistics.

		On failure the previous list is kept. A statistics failure does not
		undo a successful list reload.
		"""
		self._update(is_loading=True, error_message=None)
		try:
			try:
				peers = await self._client.get_peers()
			except APIError as exc:
				self._fail("Loading peers", exc)
			else:
				self._update(peers=tuple(peers))
			await self.refresh_stats()
		finally:
			self._update(is_loading=False)

	async def refresh_stats(self) -> None:
		try:
			stats = await self._client.get_server_stats()
		except APIError as exc:
			self._fail("Loading server statistics", exc)
			return
		self._update(server_stats=stats)

	async def create(
		self,
		name: str,
		description: Optional[str] = None,
		device_name: Optional[str] = None,
		device_identifier: Optional[str] = None,
	) -> Optional[Peer]:
		self._update(is_loading=True, error_message=None)
		try:
			peer = await self._client.create_peer(
				name,
				description=description,
				device_name=device_name,
				device_identifier=device_identifier,
			)
		except (APIError, ValidationError) as exc:
			self._fail("Creating peer", exc)
			return None
		finally:
			self._update(is_loading=False)
		self._update(peers=self.state.peers + (peer,))
		await self.refresh_stats()
		return peer

	async def toggle(self, peer: Peer) -> Optional[Peer]:
		"""Flip ``peer`` server-side; the cached element changes only on success."""
		try:
			result = await self._client.toggle_peer(peer.id)
			if isinstance(result, PeerToggleResult):
				_log.debug("Toggle for peer %d returned a status object, re-fetching", peer.id)
				result = await self._client.get_peer(result.peer_id)
		except APIError as exc:
			self._fail("Toggling peer", exc)
			return None
		self._update(peers=_replace_by_id(self.state.peers, result), error_message=None)
		await self.refresh_stats()
		return result

	async def update(
		self,
		peer: Peer,
		*,
		name: Optional[str] = None,
		description: Optional[str] = None,
		is_enabled: Optional[bool] = None,
		device_name: Optional[str] = None,
	) -> Optional[Peer]:
		try:
			updated = await self._client.update_peer(
				peer.id,
				name=name,
				description=description,
				is_enabled=is_enabled,
				device_name=device_name,
			)
		except (APIError, ValidationError) as exc:
			self._fail("Updating peer", exc)
			return None
		self._update(peers=_replace_by_id(self.state.peers, updated), error_message=None)
		await self.refresh_stats()
		return updated

	async def delete(self, peer: Peer) -> bool:
		try:
			await self._client.delete_peer(peer.id)
		except APIError as exc:
			self._fail("Deleting peer", exc)
			return False
		self._update(
			peers=tuple(p for p in self.state.peers if p.id != peer.id),
			error_message=None,
		)
		await self.refresh_stats()
		return True

	async def fetch_config(self, peer_id: int) -> Optional[PeerConfig]:
		"""Return the generated config. Never cached in the collection state."""
		try:
			return await self._client.get_peer_config(peer_id)
		except APIError as exc:
			self._fail("Loading peer config", exc)
			return None

	async def fetch_peer_stats(self, peer_id: int) -> Optional[PeerStatistics]:
		try:
			return await self._client.get_peer_stats(peer_id)
		except APIError as exc:
			self._fail("Loading peer statistics", exc)
			return None
