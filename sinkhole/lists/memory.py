#!/usr/bin/env python3
#
# sinkhole/lists/memory.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""In-memory list repository for tests and storage-less deployments."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping

from .models import DomainList
from .repository import ListRepository


class InMemoryListRepository(ListRepository):
	"""Process-local stand-in for the SQLite repository.

	Nothing is persisted; state is lost when the instance goes away.
	Optionally seeded with canned values per list.
	"""

	def __init__(self, seed: Mapping[DomainList, Iterable[str]] | None = None):
		self._lock = threading.Lock()
		self._entries: dict[DomainList, list[str]] = {dl: [] for dl in DomainList}
		for domain_list, values in (seed or {}).items():
			for value in values:
				if value not in self._entries[domain_list]:
					self._entries[domain_list].append(value)

	def get(self, domain_list: DomainList) -> list[str]:
		with self._lock:
			return list(self._entries[domain_list])

	def contains(self, domain_list: DomainList, value: str) -> bool:
		with self._lock:
			return value in self._entries[domain_list]

	def add(self, domain_list: DomainList, value: str) -> None:
		with self._lock:
			entries = self._entries[domain_list]
			if value not in entries:
				entries.append(value)

	def remove(self, domain_list: DomainList, value: str) -> None:
		with self._lock:
			entries = self._entries[domain_list]
			if value in entries:
				entries.remove(value)
