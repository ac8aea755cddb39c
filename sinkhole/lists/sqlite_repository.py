#!/usr/bin/env python3
#
# sinkhole/lists/sqlite_repository.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""SQLite-backed implementation of the list repository."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from ..db.sqlite_runtime import close_connection, connect, transaction
from ..db.sqlite_schema import init_schema
from ..utils.time import utcnow
from .models import DomainList
from .repository import ListRepository, ListStorageError

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ListQueries:
	"""SQL statements bound to one list table."""
	table: str
	select_all: str
	exists: str
	upsert: str
	delete: str


def _queries_for(table: str) -> _ListQueries:
	return _ListQueries(
		table=table,
		select_all=f"SELECT domain FROM {table} WHERE enabled = 1 ORDER BY id",
		exists=f"SELECT EXISTS(SELECT 1 FROM {table} WHERE enabled = 1 AND domain = ?)",
		# A disabled row with the same value is re-enabled rather than duplicated
		upsert=(
			f"INSERT INTO {table} (domain, enabled, date_added, date_modified) "
			"VALUES (?, 1, ?, ?) "
			"ON CONFLICT(domain) DO UPDATE SET enabled = 1, date_modified = excluded.date_modified"
		),
		delete=f"DELETE FROM {table} WHERE enabled = 1 AND domain = ?",
	)


# Exhaustive: every DomainList member must have exactly one table here.
LIST_QUERIES: dict[DomainList, _ListQueries] = {
	DomainList.ALLOW: _queries_for("whitelist"),
	DomainList.DENY: _queries_for("blacklist"),
	DomainList.PATTERN: _queries_for("regex"),
}


class SqliteListRepository(ListRepository):
	"""List repository backed by the SQLite gravity database.

	Each call runs on its own short-lived connection, so instances can be
	shared freely between request threads. Writes take an immediate
	transaction; concurrent writers are serialized by SQLite's busy timeout.
	"""

	def __init__(self, db_path: Path):
		self._db_path = db_path

	@property
	def db_path(self) -> Path:
		return self._db_path

	def initialize(self) -> None:
		"""Create the list tables if they do not exist yet."""
		conn = connect(self._db_path)
		try:
			init_schema(conn)
		finally:
			close_connection(conn)

	@contextmanager
	def _connection(self, domain_list: DomainList, operation: str) -> Iterator[sqlite3.Connection]:
		conn: sqlite3.Connection | None = None
		try:
			conn = connect(self._db_path)
			yield conn
		except (sqlite3.Error, OSError) as exc:
			_log.error(
				"LIST_STORAGE %s failed (list=%s, db=%s): %s",
				operation,
				domain_list.value,
				self._db_path,
				exc,
			)
			raise ListStorageError(domain_list, operation) from exc
		finally:
			if conn is not None:
				close_connection(conn)

	def get(self, domain_list: DomainList) -> list[str]:
		queries = LIST_QUERIES[domain_list]
		with self._connection(domain_list, "get") as conn:
			rows = conn.execute(queries.select_all).fetchall()
		return [row["domain"] for row in rows]

	def contains(self, domain_list: DomainList, value: str) -> bool:
		queries = LIST_QUERIES[domain_list]
		with self._connection(domain_list, "contains") as conn:
			row = conn.execute(queries.exists, (value,)).fetchone()
		return bool(row[0])

	def add(self, domain_list: DomainList, value: str) -> None:
		queries = LIST_QUERIES[domain_list]
		now = utcnow()
		with self._connection(domain_list, "add") as conn:
			with transaction(conn, immediate=True):
				conn.execute(queries.upsert, (value, now, now))
		_log.info("LIST_ADD list=%s value=%s", domain_list.value, value)

	def remove(self, domain_list: DomainList, value: str) -> None:
		queries = LIST_QUERIES[domain_list]
		with self._connection(domain_list, "remove") as conn:
			with transaction(conn, immediate=True):
				cur = conn.execute(queries.delete, (value,))
				removed = cur.rowcount
		if removed:
			_log.info("LIST_REMOVE list=%s value=%s", domain_list.value, value)
		else:
			_log.debug("LIST_REMOVE list=%s value=%s (not present)", domain_list.value, value)
