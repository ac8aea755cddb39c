#!/usr/bin/env python3
#
# sinkhole/api/version.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Version endpoint."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends

from ..utils.config import Config
from ..utils.deps import get_config
from ..utils.version import (
	BUILD_INFO,
	VERSION,
	ComponentVersion,
	read_core_version,
	read_web_version,
)
from .response import ok_response

router = APIRouter(tags=["version"])


@router.get("/version")
async def version(cfg: Config = Depends(get_config)):
	"""Get the versions of the core scripts, the web interface and this API.

	Components whose version cannot be determined report empty fields.
	"""
	core = await asyncio.to_thread(read_core_version, cfg) or ComponentVersion()
	web = await asyncio.to_thread(read_web_version, cfg) or ComponentVersion()
	data = {
		"core": core.to_dict(),
		"web": web.to_dict(),
		"api": {"version": VERSION, "build": BUILD_INFO},
	}
	return ok_response(data=data)
