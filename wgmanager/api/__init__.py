#!/usr/bin/env python3
#
# wgmanager/api/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Management API client and its error taxonomy."""

from .client import DEFAULT_TIMEOUT, APIClient
from .errors import (
	APIError,
	DecodingError,
	InvalidResponseError,
	InvalidURLError,
	NetworkError,
	NoDataError,
	ServerError,
	UnauthorizedError,
)

__all__ = [
	"APIClient",
	"APIError",
	"DEFAULT_TIMEOUT",
	"DecodingError",
	"InvalidResponseError",
	"InvalidURLError",
	"NetworkError",
	"NoDataError",
	"ServerError",
	"UnauthorizedError",
]
