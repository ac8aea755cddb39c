#!/usr/bin/env python3
#
# sinkhole/db/sqlite_schema.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""SQLite schema initialization for the domain list database."""

from __future__ import annotations

import logging
import sqlite3

from .sqlite_runtime import transaction

_log = logging.getLogger(__name__)

# One table per domain list. The tables share a layout but are otherwise
# independent: no foreign keys between them.
LIST_TABLES: tuple[str, ...] = ("whitelist", "blacklist", "regex")


# ─────────────────────────────────────────────────────────────────────────────
# Schema Initialization
# ─────────────────────────────────────────────────────────────────────────────


def init_schema(conn: sqlite3.Connection) -> None:
	"""Create the required database schema (factory default).

	Safe to call on every startup.
	"""
	with transaction(conn, immediate=True):
		for table in LIST_TABLES:
			conn.execute(
				f"""
				CREATE TABLE IF NOT EXISTS {table} (
					id INTEGER PRIMARY KEY AUTOINCREMENT,
					domain TEXT NOT NULL UNIQUE,
					enabled INTEGER NOT NULL DEFAULT 1,
					date_added timestamp NOT NULL,
					date_modified timestamp NOT NULL,
					comment TEXT
				)
				"""
			)
			conn.execute(
				f"CREATE INDEX IF NOT EXISTS idx_{table}_enabled ON {table}(enabled)"
			)
	_log.debug("Domain list schema ready (%s)", ", ".join(LIST_TABLES))
