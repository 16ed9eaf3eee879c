#!/usr/bin/env python3
#
# wgmanager/models/stats.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Server-wide statistics snapshot."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ServerStatistics(BaseModel):
	"""Aggregate peer counts and traffic totals. Read-only, replaced wholesale."""
	model_config = ConfigDict(frozen=True)

	total_peers: int = Field(..., ge=0)
	active_peers: int = Field(..., ge=0)
	enabled_peers: int = Field(..., ge=0)
	disabled_peers: int = Field(..., ge=0)
	online_peers: int = Field(..., ge=0)
	total_rx: int = Field(default=0, ge=0)
	total_tx: int = Field(default=0, ge=0)
	total_rx_formatted: str
	total_tx_formatted: str
	server_uptime: Optional[str] = None
	interface: Optional[str] = None
