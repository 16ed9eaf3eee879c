#!/usr/bin/env python3
#
# wgmanager/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""WireGuard Manager – client for the WireGuard management API."""

from .api import APIClient
from .controllers import PeerCollectionController, SessionController

__version__ = "1.0.0"

__all__ = ["APIClient", "PeerCollectionController", "SessionController", "__version__"]
