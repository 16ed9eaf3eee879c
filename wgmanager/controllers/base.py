#!/usr/bin/env python3
#
# wgmanager/controllers/base.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""State snapshots and change notification shared by the controllers."""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Generic, TypeVar

_log = logging.getLogger(__name__)

S = TypeVar("S")

Listener = Callable[[S], None]


class ObservableController(Generic[S]):
	"""Holds one frozen state snapshot and notifies listeners on replacement.

	Controllers are driven from a single asyncio event loop; every state
	write happens on that loop, so listeners observe snapshots in order and
	no locking is required.
	"""

	def __init__(self, initial: S) -> None:
		self._state: S = initial
		self._listeners: list[Listener[S]] = []

	@property
	def state(self) -> S:
		return self._state

	def subscribe(self, listener: Listener[S]) -> Callable[[], None]:
		"""Register ``listener`` for future snapshots. Returns an unsubscribe callable."""
		self._listeners.append(listener)

		def unsubscribe() -> None:
			try:
				self._listeners.remove(listener)
			except ValueError:
				pass

		return unsubscribe

	def _update(self, **changes) -> None:
		new_state = dataclasses.replace(self._state, **changes)
		if new_state == self._state:
			return
		self._state = new_state
		for listener in list(self._listeners):
			try:
				listener(new_state)
			except Exception:
				_log.exception("State listener %r failed", listener)
