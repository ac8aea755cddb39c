#!/usr/bin/env python3
#
# sinkhole/lists/repository.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Storage contract for the allow, deny and pattern lists.

Every caller reads and mutates list state through :class:`ListRepository`
only. Which backend satisfies the contract is decided once, when the
application is composed (see ``sinkhole.main.create_app``).

All operations act on enabled entries only. Values are stored as given;
checking that a value is a well-formed domain or pattern belongs to the
caller (see ``sinkhole.lists.validation``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import DomainList


class ListStorageError(Exception):
	"""Raised when the list store cannot complete an operation.

	Covers connection loss, rejected queries and failed commits alike.
	The low-level cause is chained as ``__cause__`` for logging; callers
	should treat the operation as failed with unknown effect.
	"""

	def __init__(self, domain_list: DomainList, operation: str):
		self.domain_list = domain_list
		self.operation = operation
		super().__init__(f"List storage failure ({operation} on {domain_list.value} list)")


class ListRepository(ABC):
	"""Abstract CRUD interface over the three domain lists."""

	@abstractmethod
	def get(self, domain_list: DomainList) -> list[str]:
		"""Return every enabled value in the list, in storage order."""

	@abstractmethod
	def contains(self, domain_list: DomainList, value: str) -> bool:
		"""Return True if an enabled entry with exactly this value exists."""

	@abstractmethod
	def add(self, domain_list: DomainList, value: str) -> None:
		"""Store the value as an enabled entry.

		Adding a value that is already present succeeds and leaves a single
		enabled entry.
		"""

	@abstractmethod
	def remove(self, domain_list: DomainList, value: str) -> None:
		"""Remove the enabled entry with this value.

		Removing a value that is not present succeeds without changes.
		"""
