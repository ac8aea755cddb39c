#!/usr/bin/env python3
#
# sinkhole/lists/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Domain lists: allow-list, deny-list and pattern (regex) list storage."""

from .models import DomainList, ListEntryCreate
from .repository import ListRepository, ListStorageError
from .memory import InMemoryListRepository
from .sqlite_repository import SqliteListRepository

__all__ = [
	"DomainList",
	"InMemoryListRepository",
	"ListEntryCreate",
	"ListRepository",
	"ListStorageError",
	"SqliteListRepository",
]
