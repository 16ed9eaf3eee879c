#!/usr/bin/env python3
#
# wgmanager/api/endpoints.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Endpoint path table of the management API."""

from __future__ import annotations

API_PREFIX = "/api"

# Authentication
LOGIN = f"{API_PREFIX}/auth/token"
ME = f"{API_PREFIX}/auth/me"

# Peers
PEERS = f"{API_PREFIX}/peers/"
SERVER_STATS = f"{API_PREFIX}/peers/stats/server"

# Liveness probe (outside the API prefix)
HEALTH = "/health"


def peer(peer_id: int) -> str:
	return f"{API_PREFIX}/peers/{int(peer_id)}"


def peer_config(peer_id: int) -> str:
	return f"{peer(peer_id)}/config"


def peer_toggle(peer_id: int) -> str:
	return f"{peer(peer_id)}/toggle"


def peer_stats(peer_id: int) -> str:
	return f"{peer(peer_id)}/stats"
