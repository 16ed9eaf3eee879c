#!/usr/bin/env python3
#
# wgmanager/utils/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#
