#!/usr/bin/env python3
#
# wgmanager/models/peers.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""WireGuard peer-related Pydantic models."""

from __future__ import annotations

import base64
import binascii
import io
from datetime import datetime, timedelta
from typing import Optional

import qrcode
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.format import format_bytes, short_address
from ..utils.time import as_utc, time_ago, utcnow

# Peer is "online" if its last handshake is younger than this
ONLINE_THRESHOLD = timedelta(seconds=180)


class PeerCreate(BaseModel):
	"""Peer creation payload."""
	name: str
	description: Optional[str] = None
	device_name: Optional[str] = None
	device_identifier: Optional[str] = None

	@field_validator("name")
	@classmethod
	def name_not_blank(cls, v: str) -> str:
		if not v.strip():
			raise ValueError("Peer name is required")
		return v

	def to_json(self) -> dict:
		"""Request body; absent optional fields are omitted."""
		return self.model_dump(exclude_none=True)


class PeerUpdate(BaseModel):
	"""Peer update payload. Only explicitly supplied fields are sent."""
	name: Optional[str] = Field(None, min_length=1)
	description: Optional[str] = None
	is_enabled: Optional[bool] = None
	device_name: Optional[str] = None

	def to_json(self) -> dict:
		return self.model_dump(exclude_unset=True)


class Peer(BaseModel):
	"""Peer (VPN client device) as reported by the server."""
	model_config = ConfigDict(frozen=True)

	id: int
	name: str
	description: Optional[str] = None
	device_name: Optional[str] = None
	device_identifier: Optional[str] = None
	public_key: str
	ip_address: str
	allowed_ips: str
	persistent_keepalive: int = Field(default=25, ge=0)
	is_active: bool
	is_enabled: bool
	total_rx: int = Field(default=0, ge=0)  # bytes received
	total_tx: int = Field(default=0, ge=0)  # bytes transmitted
	last_handshake: Optional[datetime] = None
	created_at: datetime
	updated_at: datetime

	@field_validator("last_handshake", "created_at", "updated_at")
	@classmethod
	def _utc(cls, v: Optional[datetime]) -> Optional[datetime]:
		return as_utc(v)

	@property
	def display_name(self) -> str:
		return self.name

	def is_online(self, now: Optional[datetime] = None) -> bool:
		"""True if the last handshake happened less than three minutes before ``now``."""
		if self.last_handshake is None:
			return False
		now = as_utc(now) if now is not None else utcnow()
		return now - self.last_handshake < ONLINE_THRESHOLD

	def status_text(self, now: Optional[datetime] = None) -> str:
		if not self.is_enabled:
			return "Disabled"
		return "Connected" if self.is_online(now) else "Disconnected"

	def last_seen_text(self, now: Optional[datetime] = None) -> str:
		if self.last_handshake is None:
			return "Never connected"
		return time_ago(self.last_handshake, now)

	@property
	def total_data(self) -> int:
		return self.total_rx + self.total_tx

	@property
	def formatted_rx(self) -> str:
		return format_bytes(self.total_rx)

	@property
	def formatted_tx(self) -> str:
		return format_bytes(self.total_tx)

	@property
	def formatted_total_data(self) -> str:
		return format_bytes(self.total_data)

	@property
	def short_ip_address(self) -> str:
		return short_address(self.ip_address)


class PeerToggleResult(BaseModel):
	"""Alternate toggle response carrying only the new enabled state."""
	model_config = ConfigDict(frozen=True)

	peer_id: int
	name: str
	is_enabled: bool
	message: str


class PeerConfig(BaseModel):
	"""Generated client configuration (config file text plus optional QR image)."""
	model_config = ConfigDict(frozen=True)

	config_text: str
	qr_code_base64: Optional[str] = None

	def qr_png_bytes(self) -> Optional[bytes]:
		"""Decode the server-rendered QR image, if one was sent."""
		if not self.qr_code_base64:
			return None
		payload = self.qr_code_base64
		# Tolerate data-URI prefixes ("data:image/png;base64,...")
		if payload.startswith("data:") and "," in payload:
			payload = payload.split(",", 1)[1]
		try:
			return base64.b64decode(payload, validate=True)
		except (binascii.Error, ValueError) as exc:
			raise ValueError("QR code payload is not valid base64") from exc

	def qr_ascii(self) -> str:
		"""Render the config text as a terminal QR code."""
		qr = qrcode.QRCode(border=1, error_correction=qrcode.constants.ERROR_CORRECT_L)
		qr.add_data(self.config_text)
		qr.make(fit=True)
		buf = io.StringIO()
		qr.print_ascii(out=buf)
		return buf.getvalue()


class PeerStatistics(BaseModel):
	"""Traffic statistics for a single peer."""
	model_config = ConfigDict(frozen=True)

	peer_id: int
	name: str
	public_key: str
	ip_address: str
	is_enabled: bool
	total_rx: int = Field(default=0, ge=0)
	total_tx: int = Field(default=0, ge=0)
	total_rx_formatted: str
	total_tx_formatted: str
	last_handshake: Optional[datetime] = None
	last_handshake_ago: Optional[str] = None
	is_online: bool

	@field_validator("last_handshake")
	@classmethod
	def _utc(cls, v: Optional[datetime]) -> Optional[datetime]:
		return as_utc(v)
