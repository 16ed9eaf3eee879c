#!/usr/bin/env python3
#
# wgmanager/models/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Pydantic models mirroring the management API payloads."""

from .common import ErrorDetail
from .users import (
	LoginRequest,
	TokenResponse,
	User,
)
from .peers import (
	Peer,
	PeerConfig,
	PeerCreate,
	PeerStatistics,
	PeerToggleResult,
	PeerUpdate,
)
from .stats import ServerStatistics

__all__ = [
	# Common
	"ErrorDetail",
	# Users
	"LoginRequest",
	"TokenResponse",
	"User",
	# Peers
	"Peer",
	"PeerConfig",
	"PeerCreate",
	"PeerStatistics",
	"PeerToggleResult",
	"PeerUpdate",
	# Statistics
	"ServerStatistics",
]
