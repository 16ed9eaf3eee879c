#!/usr/bin/env python3
#
# wgmanager/api/errors.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Error taxonomy raised by the API client.

Only :class:`~wgmanager.api.client.APIClient` classifies raw transport and
HTTP outcomes; every other layer sees one of these kinds. ``str(exc)`` is the
message suitable for showing to the user.
"""

from __future__ import annotations


class APIError(Exception):
	"""Base class for every classified API failure."""

	description = "Unknown API error"

	def __init__(self, description: str | None = None) -> None:
		if description is not None:
			self.description = description
		super().__init__(self.description)

	def __str__(self) -> str:
		return self.description


class InvalidURLError(APIError):
	"""Base URL is absent or malformed. Raised before any network access."""

	description = "Invalid URL"


class NoDataError(APIError):
	"""A payload was expected but the response body was empty."""

	description = "No data received from server"


class InvalidResponseError(APIError):
	"""Response could not be interpreted as an HTTP result we handle."""

	description = "Invalid response from server"


class UnauthorizedError(APIError):
	"""Missing token, or the server answered 401."""

	description = "Unauthorized. Please login again."


class ServerError(APIError):
	"""4xx/5xx (other than 401) or an unexpected success status."""

	def __init__(self, message: str) -> None:
		self.message = message
		super().__init__(message)


class DecodingError(APIError):
	"""Response body did not match the expected payload type."""

	def __init__(self, underlying: Exception) -> None:
		self.underlying = underlying
		super().__init__(f"Failed to decode response: {_summarize(underlying)}")


class NetworkError(APIError):
	"""Transport failure: DNS, timeout, connection reset, ..."""

	def __init__(self, underlying: Exception) -> None:
		self.underlying = underlying
		super().__init__(f"Network error: {_summarize(underlying)}")


def _summarize(exc: Exception) -> str:
	text = str(exc).strip()
	if not text:
		return type(exc).__name__
	# Pydantic validation errors span several lines; the first one is enough
	return text.splitlines()[0]
