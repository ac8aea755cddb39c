#!/usr/bin/env python3
#
# sinkhole/api/auth.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""API key authentication dependency."""

from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import APIKeyHeader

from ..utils.config import Config
from ..utils.deps import get_config

_log = logging.getLogger(__name__)

AUTH_HEADER = "X-Sinkhole-Authenticate"

_api_key_header = APIKeyHeader(name=AUTH_HEADER, auto_error=False)


def require_api_key(
	request: Request,
	supplied_key: Optional[str] = Depends(_api_key_header),
	cfg: Config = Depends(get_config),
) -> None:
	"""FastAPI dependency that enforces the configured API key.

	Does nothing when no key is configured.
	"""
	if not cfg.auth_required:
		return
	if supplied_key and hmac.compare_digest(supplied_key.encode(), cfg.api_key.encode()):
		return

	client_ip = request.client.host if request.client else "unknown"
	_log.warning("AUTH rejected %s %s from %s", request.method, request.url.path, client_ip)
	raise HTTPException(status_code=401, detail="Not authenticated")
