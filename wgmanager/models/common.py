#!/usr/bin/env python3
#
# wgmanager/models/common.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Shared response envelopes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
	"""Error body emitted by the management API (``{"detail": "..."}``)."""
	model_config = ConfigDict(frozen=True)

	detail: str
