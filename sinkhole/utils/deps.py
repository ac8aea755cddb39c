#!/usr/bin/env python3
#
# sinkhole/utils/deps.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""FastAPI dependency helpers."""

from __future__ import annotations

from fastapi import Request

from ..lists import ListRepository
from .config import Config


def get_list_repository(request: Request) -> ListRepository:
	"""Return the list repository bound to this application."""
	return request.app.state.list_repository


def get_config(request: Request) -> Config:
	"""Get the application configuration from app state."""
	return request.app.state.cfg
