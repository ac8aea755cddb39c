#!/usr/bin/env python3
#
# sinkhole/utils/config.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Configuration loading and app-level defaults."""

from __future__ import annotations

import ipaddress
import logging
import os
from dataclasses import dataclass
from pathlib import Path

_log = logging.getLogger(__name__)


class ConfigValidationError(Exception):
	"""Raised when critical configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOCAL_VERSIONS = "/etc/pihole/localversions"
DEFAULT_LOCAL_BRANCHES = "/etc/pihole/localbranches"
DEFAULT_WEB_VERSION = "/var/www/html/admin/VERSION"
LIST_BACKENDS = ("sqlite", "memory")
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Config:
	"""Resolved runtime configuration derived from env and defaults."""
	base_dir: Path
	data_dir: Path
	db_path: Path
	local_versions_file: Path = Path(DEFAULT_LOCAL_VERSIONS)
	local_branches_file: Path = Path(DEFAULT_LOCAL_BRANCHES)
	web_version_file: Path = Path(DEFAULT_WEB_VERSION)
	host: str = DEFAULT_HOST
	port: int = DEFAULT_PORT
	log_level: str = "INFO"
	api_key: str = ""
	list_backend: str = "sqlite"

	@property
	def auth_required(self) -> bool:
		return bool(self.api_key)


def _parse_value(raw: str) -> str:
	"""Extract value, respecting quotes and stripping inline comments.

	Handles quoted values correctly (e.g., SINKHOLE_API_KEY="abc#5")
	and only strips comments from unquoted values.
	"""
	raw = raw.strip()
	if raw and raw[0] in ('"', "'"):
		quote = raw[0]
		end = raw.find(quote, 1)
		if end != -1:
			return raw[1:end]
		# Unterminated quote - fall through to unquoted handling
	if " #" in raw:
		raw = raw.split(" #", 1)[0]
	return raw.strip()


def load_dotenv(dotenv_path: Path | None = None) -> None:
	"""Load simple KEY=VALUE pairs from settings.env.

	Behavior:
	- Ignores blank lines and comments (# ...)
	- Handles `export KEY=VALUE` syntax (common in shell-sourced files)
	- Respects quoted values (doesn't strip # inside quotes)
	- Does not override already-set environment variables
	"""
	project_root = Path(__file__).resolve().parents[2]
	dotenv_path = dotenv_path or (project_root / "settings.env")
	if not dotenv_path.exists():
		return
	for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
		line = raw_line.strip()
		if not line or line.startswith("#"):
			continue
		if "=" not in line:
			continue
		key, value = line.split("=", 1)
		key = key.strip()

		if key.startswith("export "):
			key = key[7:].strip()

		value = _parse_value(value)
		if not key:
			continue
		os.environ.setdefault(key, value)


def _parse_host(raw: str) -> str:
	try:
		return str(ipaddress.IPv4Address(raw.strip()))
	except ValueError as exc:
		raise ConfigValidationError(f"SINKHOLE_HOST must be an IPv4 address: {raw!r}") from exc


def _parse_port(raw: str) -> int:
	try:
		port = int(raw.strip())
	except ValueError as exc:
		raise ConfigValidationError(f"SINKHOLE_PORT must be an integer: {raw!r}") from exc
	if not 1 <= port <= 65535:
		raise ConfigValidationError(f"SINKHOLE_PORT out of range (1-65535): {port}")
	return port


def _parse_file_location(name: str, default: str) -> Path:
	raw = os.getenv(name, default).strip()
	path = Path(raw)
	if not path.is_absolute():
		raise ConfigValidationError(f"{name} must be an absolute path: {raw!r}")
	return path


def load_config() -> Config:
	"""Load configuration from environment variables (optionally via settings.env)."""
	load_dotenv()
	project_root = Path(__file__).resolve().parents[2]

	data_dir = Path(os.getenv("SINKHOLE_DATA_DIR", str(project_root / "data"))).resolve()
	db_path = (data_dir / "gravity.db").resolve()

	# Self-healing: Ensure data directory exists
	try:
		if data_dir.exists() and not data_dir.is_dir():
			raise ConfigValidationError(f"Path exists but is not a directory: {data_dir}")
		data_dir.mkdir(parents=True, exist_ok=True)
	except OSError as exc:
		raise ConfigValidationError(f"Cannot create data directory: {exc}") from exc

	log_level = os.getenv("LOG_LEVEL", "INFO").upper()
	if log_level not in LOG_LEVELS:
		_log.warning("Unknown LOG_LEVEL %r, using INFO", log_level)
		log_level = "INFO"

	list_backend = os.getenv("SINKHOLE_LIST_BACKEND", "sqlite").strip().lower()
	if list_backend not in LIST_BACKENDS:
		raise ConfigValidationError(
			f"SINKHOLE_LIST_BACKEND must be one of {', '.join(LIST_BACKENDS)}: {list_backend!r}"
		)

	return Config(
		base_dir=project_root,
		data_dir=data_dir,
		db_path=db_path,
		local_versions_file=_parse_file_location("SINKHOLE_LOCAL_VERSIONS", DEFAULT_LOCAL_VERSIONS),
		local_branches_file=_parse_file_location("SINKHOLE_LOCAL_BRANCHES", DEFAULT_LOCAL_BRANCHES),
		web_version_file=_parse_file_location("SINKHOLE_WEB_VERSION", DEFAULT_WEB_VERSION),
		host=_parse_host(os.getenv("SINKHOLE_HOST", DEFAULT_HOST)),
		port=_parse_port(os.getenv("SINKHOLE_PORT", str(DEFAULT_PORT))),
		log_level=log_level,
		api_key=os.getenv("SINKHOLE_API_KEY", ""),
		list_backend=list_backend,
	)

