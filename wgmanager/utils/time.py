#!/usr/bin/env python3
#
# wgmanager/utils/time.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Timezone-aware time utilities."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
	"""Return the current UTC time as a timezone-aware datetime."""
	return datetime.now(timezone.utc)


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
	"""Convert a datetime to aware UTC.

	The management API emits some timestamps without an offset; those are
	server-side UTC values, so a naive datetime is tagged as UTC instead of
	being rejected.
	"""
	if dt is None:
		return None
	if dt.tzinfo is None:
		return dt.replace(tzinfo=timezone.utc)
	return dt.astimezone(timezone.utc)


_UNITS = (
	("year", 365 * 86400),
	("month", 30 * 86400),
	("week", 7 * 86400),
	("day", 86400),
	("hour", 3600),
	("minute", 60),
	("second", 1),
)


def time_ago(dt: datetime, now: Optional[datetime] = None) -> str:
	"""Render a relative time phrase such as '5 minutes ago' or 'in 2 hours'."""
	now = as_utc(now) if now is not None else utcnow()
	delta = int((now - as_utc(dt)).total_seconds())
	if delta == 0:
		return "now"
	seconds = abs(delta)
	for unit, size in _UNITS:
		if seconds >= size:
			count = seconds // size
			label = f"{count} {unit}{'' if count == 1 else 's'}"
			return f"{label} ago" if delta > 0 else f"in {label}"
	return "now"
