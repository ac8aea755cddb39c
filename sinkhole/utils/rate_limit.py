#!/usr/bin/env python3
#
# sinkhole/utils/rate_limit.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Rate limiting configuration using slowapi."""

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

# Rate limit presets
RATE_LIMIT_DEFAULT = "60/minute"
RATE_LIMIT_LIST_READ = "300/minute"   # Dashboards poll list contents
RATE_LIMIT_LIST_WRITE = "60/minute"   # Each write takes the database write lock

# Global limiter instance
limiter = Limiter(key_func=get_remote_address)

__all__ = [
	"RATE_LIMIT_DEFAULT",
	"RATE_LIMIT_LIST_READ",
	"RATE_LIMIT_LIST_WRITE",
	"limiter",
]
