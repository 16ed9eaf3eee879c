#!/usr/bin/env python3
#
# wgmanager/models/users.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""User and authentication Pydantic models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.time import as_utc


class LoginRequest(BaseModel):
	"""Login form payload (sent as application/x-www-form-urlencoded)."""
	username: str = Field(..., min_length=1, max_length=64)
	password: str = Field(..., min_length=1, max_length=256)

	@field_validator("username")
	@classmethod
	def strip_username(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise ValueError("Username is required")
		return v

	def form_data(self) -> dict[str, str]:
		return {"username": self.username, "password": self.password}


class TokenResponse(BaseModel):
	"""Token payload returned by the token endpoint."""
	model_config = ConfigDict(frozen=True)

	access_token: str = Field(..., min_length=1)
	token_type: str = "bearer"


class User(BaseModel):
	"""Account of the logged-in operator."""
	model_config = ConfigDict(frozen=True)

	id: int
	username: str
	email: str
	is_active: bool
	is_superuser: bool
	created_at: datetime

	@field_validator("created_at")
	@classmethod
	def _utc(cls, v: datetime) -> datetime:
		return as_utc(v)

	@property
	def display_name(self) -> str:
		return self.username

	@property
	def is_admin(self) -> bool:
		return self.is_superuser
