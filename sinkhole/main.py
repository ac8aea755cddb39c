#!/usr/bin/env python3
#
# sinkhole/main.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""FastAPI application factory and startup lifecycle wiring."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .api import lists as lists_api
from .api import settings as settings_api
from .api import version as version_api
from .db.sqlite_runtime import checkpoint_wal, close_all_connections
from .lists import InMemoryListRepository, ListRepository, SqliteListRepository
from .utils.banner import print_banner_once
from .utils.config import Config, load_config
from .utils.rate_limit import limiter
from .utils.request_id import RequestIDMiddleware
from .utils.version import VERSION

_log = logging.getLogger(__name__)

# ANSI color codes for log levels (if TTY)
_LOG_COLORS = {
	"DEBUG": "\033[36m",    # Cyan
	"INFO": "\033[32m",     # Green
	"WARNING": "\033[33m",  # Yellow
	"ERROR": "\033[31m",    # Red
	"CRITICAL": "\033[35m", # Magenta
}
_RESET = "\033[0m"
_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ColoredFormatter(logging.Formatter):
	"""Custom formatter that adds color to log levels in TTY."""

	def format(self, record):
		orig_levelname = record.levelname
		color = _LOG_COLORS.get(orig_levelname)
		if color:
			record.levelname = f"{color}{orig_levelname:<8}{_RESET}"
		else:
			record.levelname = f"{orig_levelname:<8}"
		try:
			return super().format(record)
		finally:
			record.levelname = orig_levelname


def _setup_logging(log_level: str) -> None:
	"""Configure unified logging for the entire application."""
	level = getattr(logging, log_level, logging.INFO)

	if sys.stdout.isatty():
		formatter: logging.Formatter = _ColoredFormatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)
	else:
		formatter = logging.Formatter(
			fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
			datefmt=_DATE_FORMAT,
		)

	# force=True removes any pre-existing handlers (e.g. from uvicorn)
	# so every logger inherits the same format.
	logging.basicConfig(
		level=level,
		handlers=[logging.StreamHandler(sys.stdout)],
		force=True,
	)
	for handler in logging.root.handlers:
		handler.setFormatter(formatter)

	# Make sure uvicorn loggers use the root handler & level
	for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
		logger = logging.getLogger(name)
		logger.handlers.clear()
		logger.setLevel(level)
		logger.propagate = True

	# Quiet down noisy third-party libraries
	for name in ("httpcore", "httpx", "watchfiles"):
		logging.getLogger(name).setLevel(logging.WARNING)


def build_list_repository(cfg: Config) -> ListRepository:
	"""Create the list repository backend selected by the configuration."""
	if cfg.list_backend == "memory":
		_log.warning("Using in-memory list backend: list changes are NOT persisted")
		return InMemoryListRepository()
	return SqliteListRepository(cfg.db_path)


@asynccontextmanager
async def _lifespan(app: FastAPI):
	"""Application lifespan manager."""
	cfg: Config = app.state.cfg
	repo: ListRepository = app.state.list_repository

	# ─── BOOTSTRAP ───────────────────────────────────────────
	if isinstance(repo, SqliteListRepository):
		await asyncio.to_thread(repo.initialize)
		_log.info("List database ready: %s", repo.db_path)

	_log.info(
		"Sinkhole started (backend=%s, auth=%s, pid=%d)",
		type(repo).__name__,
		"on" if cfg.auth_required else "off",
		os.getpid(),
	)

	yield

	# ─── SHUTDOWN ────────────────────────────────────────────
	closed_connections = close_all_connections()
	if isinstance(repo, SqliteListRepository):
		checkpoint = checkpoint_wal(repo.db_path, mode="TRUNCATE")
		_log.info(
			"SQLITE_SHUTDOWN connections_closed=%d checkpoint_mode=%s busy=%s log_frames=%s checkpointed_frames=%s",
			closed_connections,
			checkpoint.get("mode"),
			checkpoint.get("busy"),
			checkpoint.get("log_frames"),
			checkpoint.get("checkpointed_frames"),
		)
	_log.info("Sinkhole shutdown complete")


def create_app(list_repository: ListRepository | None = None) -> FastAPI:
	"""Application factory for Sinkhole.

	``list_repository`` replaces the configured backend, e.g. in tests.
	"""
	print_banner_once()

	cfg = load_config()
	_setup_logging(cfg.log_level)

	app = FastAPI(
		title="Sinkhole",
		description="Management API for a network-wide DNS ad-blocking appliance",
		version=VERSION,
		lifespan=_lifespan,
		docs_url="/api/docs",
		redoc_url="/api/redoc",
	)

	# Store config in app state
	app.state.cfg = cfg

	# One repository per application; handlers only see the interface
	if list_repository is None:
		list_repository = build_list_repository(cfg)
	app.state.list_repository = list_repository

	# ─── MIDDLEWARE ──────────────────────────────────────────
	app.add_middleware(RequestIDMiddleware)

	# Rate limiting
	app.state.limiter = limiter
	app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

	# ─── API ROUTES ──────────────────────────────────────────
	app.include_router(version_api.router, prefix="/api")
	app.include_router(lists_api.router, prefix="/api/lists")
	app.include_router(settings_api.router, prefix="/api/settings")

	return app
