#!/usr/bin/env python3
#
# sinkhole/utils/version.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Version and build information for Sinkhole and the appliance components."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from .config import Config

_log = logging.getLogger(__name__)

_VERSION_CACHE: str | None = None
_BUILD_INFO_CACHE: str | None = None
APP_NAME = "Sinkhole"


def _read_project_file(name: str) -> str:
	"""Read a one-line file from the project root (or /app in Docker); 'dev' if absent."""
	try:
		path = Path(__file__).resolve().parent.parent.parent / name
		if not path.exists():
			path = Path("/app") / name
		if path.exists():
			return path.read_text(encoding="utf-8").strip() or "dev"
	except OSError:
		_log.debug("Could not read %s", name, exc_info=True)
	return "dev"


def get_build_info() -> str:
	"""Get build info (Git commit hash) from BUILD_INFO file. Falls back to 'dev'."""
	global _BUILD_INFO_CACHE
	if _BUILD_INFO_CACHE is None:
		_BUILD_INFO_CACHE = _read_project_file("BUILD_INFO")
	return _BUILD_INFO_CACHE


def get_version() -> str:
	"""Get application version from VERSION file. Falls back to 'dev'."""
	global _VERSION_CACHE
	if _VERSION_CACHE is None:
		_VERSION_CACHE = _read_project_file("VERSION")
	return _VERSION_CACHE


VERSION = get_version()
BUILD_INFO = get_build_info()


# ---------------------------------------------------------------------------
# Component versions (core scripts and web interface)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ComponentVersion:
	"""Release tag, branch and commit of an installed component.

	``tag`` is empty unless the installed commit is exactly a tagged release.
	"""
	tag: str = ""
	branch: str = ""
	hash: str = ""

	def to_dict(self) -> dict[str, str]:
		return asdict(self)


def parse_git_version(git_version: str, branch: str) -> ComponentVersion | None:
	"""Parse ``git describe`` output in the form ``TAG-NUMBER-gCOMMIT``.

	Returns None unless there are exactly three dash-separated parts.
	"""
	parts = git_version.split("-")
	if len(parts) != 3:
		return None

	tag, commits_since_tag, commit = parts
	return ComponentVersion(
		# Only a commit zero steps past its tag is that release
		tag=tag if commits_since_tag == "0" else "",
		branch=branch,
		hash=commit[1:],
	)


def parse_web_version(version_str: str) -> ComponentVersion | None:
	"""Parse the web interface VERSION file in the form ``TAG BRANCH COMMIT``.

	The tag may be empty (development builds start with a space).
	"""
	parts = version_str.rstrip("\n").split(" ")
	if len(parts) != 3:
		return None
	return ComponentVersion(tag=parts[0], branch=parts[1], hash=parts[2])


def _read_text(path: Path) -> str:
	try:
		return path.read_text(encoding="utf-8")
	except OSError:
		_log.debug("Version file not readable: %s", path)
		return ""


def read_core_version(cfg: Config) -> ComponentVersion | None:
	"""Read the core version from the local versions/branches files.

	Both files hold "CORE WEB FTL" entries; only the first one is used.
	"""
	local_versions = _read_text(cfg.local_versions_file)
	local_branches = _read_text(cfg.local_branches_file)

	git_version = local_versions.split(" ")[0].strip()
	core_branch = local_branches.split(" ")[0].strip()
	return parse_git_version(git_version, core_branch)


def read_web_version(cfg: Config) -> ComponentVersion | None:
	"""Read the web interface version from its VERSION file."""
	raw = _read_text(cfg.web_version_file)
	if not raw:
		return None
	return parse_web_version(raw)
