#!/usr/bin/env python3
#
# wgmanager/controllers/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Observable controllers driving the presentation layer."""

from .base import ObservableController
from .peers import PeerCollectionController, PeerCollectionState
from .session import SessionController, SessionState

__all__ = [
	"ObservableController",
	"PeerCollectionController",
	"PeerCollectionState",
	"SessionController",
	"SessionState",
]
