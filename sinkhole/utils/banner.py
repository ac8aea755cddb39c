#!/usr/bin/env python3
#
# sinkhole/utils/banner.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Startup banner for Sinkhole."""

from __future__ import annotations

import sys
import threading

from .version import BUILD_INFO, VERSION

_printed = False
_printed_lock = threading.Lock()


def render_banner() -> str:
	build_short = BUILD_INFO[:7] if BUILD_INFO else "dev"
	return (
		"\n"
		"   ___ (_)___  / /__/ /  ___  / /__\n"
		"  (_-</ / _ \\/  '_/ _ \\/ _ \\/ / -_)\n"
		" /___/_/_//_/_/\\_\\_//_/\\___/_/\\__/\n"
		f"   DNS list management API  v{VERSION} ({build_short})\n"
	)


def print_banner_once() -> None:
	"""Print the startup banner at most once per process."""
	global _printed
	with _printed_lock:
		if _printed:
			return
		_printed = True

	banner = render_banner()
	# Colorize banner in cyan if running in a TTY
	if sys.stdout.isatty():
		sys.stdout.write("\033[96m" + banner + "\033[0m\n")
	else:
		sys.stdout.write(banner + "\n")
	sys.stdout.flush()
