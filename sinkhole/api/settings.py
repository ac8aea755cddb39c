#!/usr/bin/env python3
#
# sinkhole/api/settings.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Read-only configuration API routes."""

from fastapi import APIRouter, Depends, Request

from ..utils.config import Config
from ..utils.deps import get_config
from ..utils.rate_limit import RATE_LIMIT_DEFAULT, limiter
from .auth import require_api_key
from .response import ok_response

router = APIRouter(tags=["settings"], dependencies=[Depends(require_api_key)])


@router.get("/api")
@limiter.limit(RATE_LIMIT_DEFAULT)
async def get_api_settings(request: Request, cfg: Config = Depends(get_config)):
	"""Get the running API configuration. The API key itself is never returned."""
	data = {
		"host": cfg.host,
		"port": cfg.port,
		"log_level": cfg.log_level,
		"auth_required": cfg.auth_required,
		"list_backend": cfg.list_backend,
		"file_locations": {
			"local_versions": str(cfg.local_versions_file),
			"local_branches": str(cfg.local_branches_file),
			"web_version": str(cfg.web_version_file),
		},
	}
	return ok_response(data=data)
