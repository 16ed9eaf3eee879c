#!/usr/bin/env python3
#
# wgmanager/controllers/messages.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""User-facing text for rejected input."""

from __future__ import annotations

from pydantic import ValidationError

_VALUE_ERROR_PREFIX = "Value error, "


def validation_message(exc: ValidationError) -> str:
	"""Turn the first pydantic validation error into one readable line."""
	errors = exc.errors()
	if not errors:
		return "Invalid input"
	first = errors[0]
	msg = str(first.get("msg", "Invalid input"))
	if msg.startswith(_VALUE_ERROR_PREFIX):
		msg = msg[len(_VALUE_ERROR_PREFIX):]
	loc = ".".join(str(part) for part in first.get("loc", ()))
	return f"{loc}: {msg}" if loc and first.get("type") != "value_error" else msg
