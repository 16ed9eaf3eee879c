#!/usr/bin/env python3
#
# main.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

# WireGuard Manager - management API console
# Local development entry point
#

import sys

from wgmanager.cli import main

if __name__ == "__main__":
	sys.exit(main())
