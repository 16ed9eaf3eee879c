#!/usr/bin/env python3
#
# wgmanager/utils/format.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Human-readable formatting helpers."""

from __future__ import annotations

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(num_bytes: int) -> str:
	"""Format a byte counter, e.g. ``1536 -> '1.50 KB'``."""
	value = float(num_bytes)
	if value < 1024:
		return f"{value:.0f} {_BYTE_UNITS[0]}"
	unit_index = 0
	while value >= 1024 and unit_index < len(_BYTE_UNITS) - 1:
		value /= 1024
		unit_index += 1
	return f"{value:.2f} {_BYTE_UNITS[unit_index]}"


def short_address(cidr: str) -> str:
	"""Strip the prefix length from an address such as ``10.8.0.2/32``."""
	return cidr.split("/", 1)[0]
