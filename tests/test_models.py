#!/usr/bin/env python3
#
# tests/test_models.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Tests for the wire models and their derived properties."""

from __future__ import annotations

import base64
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from wgmanager.models import (
	Peer,
	PeerConfig,
	PeerCreate,
	PeerUpdate,
	ServerStatistics,
	User,
)
from wgmanager.utils.format import format_bytes
from wgmanager.utils.time import time_ago

from .fakeapi import peer_payload

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_peer(**overrides) -> Peer:
	return Peer.model_validate(peer_payload(1, "laptop", **overrides))


class TestPeerOnline:
	"""Online status is derived from the last handshake."""

	def test_no_handshake_is_offline(self):
		peer = make_peer(last_handshake=None)
		assert peer.is_online(NOW) is False
		assert peer.is_online(NOW + timedelta(days=365)) is False

	@pytest.mark.parametrize(
		"age_seconds, online",
		[(0, True), (60, True), (179, True), (180, False), (181, False), (3600, False)],
	)
	def test_freshness_window(self, age_seconds, online):
		peer = make_peer(last_handshake=(NOW - timedelta(seconds=age_seconds)).isoformat())
		assert peer.is_online(NOW) is online

	def test_default_now_is_current_time(self):
		recent = datetime.now(timezone.utc) - timedelta(seconds=30)
		assert make_peer(last_handshake=recent.isoformat()).is_online() is True

	def test_naive_timestamps_are_utc(self):
		peer = make_peer(last_handshake="2026-03-01T11:59:00")
		assert peer.last_handshake.tzinfo is not None
		assert peer.is_online(NOW) is True

	def test_status_text(self):
		fresh = (NOW - timedelta(seconds=10)).isoformat()
		assert make_peer(last_handshake=fresh).status_text(NOW) == "Connected"
		assert make_peer(last_handshake=None).status_text(NOW) == "Disconnected"
		assert make_peer(last_handshake=fresh, is_enabled=False).status_text(NOW) == "Disabled"


class TestPeerDisplay:
	"""Human-readable peer properties."""

	def test_traffic_and_address(self):
		peer = make_peer(total_rx=150 * 1024 * 1024, total_tx=50 * 1024 * 1024, ip_address="10.8.0.2/32")
		assert peer.formatted_rx == "150.00 MB"
		assert peer.formatted_tx == "50.00 MB"
		assert peer.total_data == 200 * 1024 * 1024
		assert peer.formatted_total_data == "200.00 MB"
		assert peer.short_ip_address == "10.8.0.2"
		assert peer.display_name == "laptop"

	def test_last_seen(self):
		assert make_peer(last_handshake=None).last_seen_text(NOW) == "Never connected"
		five_min = (NOW - timedelta(minutes=5)).isoformat()
		assert make_peer(last_handshake=five_min).last_seen_text(NOW) == "5 minutes ago"

	def test_peer_is_immutable(self):
		peer = make_peer()
		with pytest.raises(ValidationError):
			peer.name = "other"

	def test_unknown_fields_are_ignored(self):
		peer = Peer.model_validate(peer_payload(1, "laptop", interface="wg0"))
		assert peer.id == 1


class TestRequestModels:
	"""Request payload encoding."""

	def test_create_round_trip_preserves_name_and_description(self):
		request = PeerCreate(name="phone", description="Personal phone")
		body = request.to_json()
		assert body == {"name": "phone", "description": "Personal phone"}

		echoed = Peer.model_validate(peer_payload(5, body["name"], description=body["description"]))
		assert echoed.name == request.name
		assert echoed.description == request.description

	def test_create_keeps_name_exactly_as_given(self):
		assert PeerCreate(name=" phone ").to_json()["name"] == " phone "
		assert PeerCreate(name="x" * 300).to_json()["name"] == "x" * 300

	@pytest.mark.parametrize("name", ["", "   "])
	def test_create_rejects_bad_names(self, name):
		with pytest.raises(ValidationError):
			PeerCreate(name=name)

	def test_update_only_dumps_supplied_fields(self):
		assert PeerUpdate(is_enabled=False).to_json() == {"is_enabled": False}
		assert PeerUpdate().to_json() == {}


class TestPeerConfig:
	"""QR helpers of the generated configuration."""

	def test_qr_png_bytes(self):
		png = b"\x89PNG\r\n\x1a\nfake"
		config = PeerConfig(config_text="[Interface]\n", qr_code_base64=base64.b64encode(png).decode())
		assert config.qr_png_bytes() == png

	def test_qr_png_data_uri(self):
		png = b"\x89PNG\r\n\x1a\nfake"
		uri = "data:image/png;base64," + base64.b64encode(png).decode()
		assert PeerConfig(config_text="x", qr_code_base64=uri).qr_png_bytes() == png

	def test_qr_png_absent(self):
		assert PeerConfig(config_text="x").qr_png_bytes() is None

	def test_qr_png_invalid(self):
		with pytest.raises(ValueError):
			PeerConfig(config_text="x", qr_code_base64="%%%not-base64").qr_png_bytes()

	def test_qr_ascii_renders(self):
		art = PeerConfig(config_text="[Interface]\nAddress = 10.8.0.2/32\n").qr_ascii()
		assert len(art.splitlines()) > 10


class TestOtherModels:

	def test_user(self):
		user = User.model_validate({
			"id": 7,
			"username": "ops",
			"email": "ops@example.com",
			"is_active": True,
			"is_superuser": False,
			"created_at": "2026-01-01T00:00:00Z",
		})
		assert user.display_name == "ops"
		assert user.is_admin is False
		assert user.created_at.tzinfo is not None

	def test_server_statistics_optional_fields(self):
		stats = ServerStatistics.model_validate({
			"total_peers": 3,
			"active_peers": 3,
			"enabled_peers": 2,
			"disabled_peers": 1,
			"online_peers": 1,
			"total_rx": 10,
			"total_tx": 20,
			"total_rx_formatted": "10 B",
			"total_tx_formatted": "20 B",
		})
		assert stats.server_uptime is None
		assert stats.interface is None


class TestFormatting:

	@pytest.mark.parametrize(
		"value, expected",
		[
			(0, "0 B"),
			(512, "512 B"),
			(1023, "1023 B"),
			(1024, "1.00 KB"),
			(1536, "1.50 KB"),
			(2 * 1024 ** 3, "2.00 GB"),
			(2 * 1024 ** 5, "2048.00 TB"),
		],
	)
	def test_format_bytes(self, value, expected):
		assert format_bytes(value) == expected

	def test_time_ago(self):
		assert time_ago(NOW, NOW) == "now"
		assert time_ago(NOW - timedelta(seconds=1), NOW) == "1 second ago"
		assert time_ago(NOW - timedelta(hours=2, minutes=5), NOW) == "2 hours ago"
		assert time_ago(NOW + timedelta(days=3), NOW) == "in 3 days"
