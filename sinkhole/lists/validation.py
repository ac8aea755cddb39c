#!/usr/bin/env python3
#
# sinkhole/lists/validation.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Validation of list values before they reach the repository."""

from __future__ import annotations

import re

import idna

from .models import DomainList

_HOST_LABEL_RE = re.compile(r"^[a-z0-9-]{1,63}$")
_MAX_HOSTNAME_LENGTH = 253
_MAX_PATTERN_LENGTH = 1024


class InvalidEntryError(ValueError):
	"""Raised when a value is not acceptable for the target list."""


def normalize_domain(domain: str) -> str:
	"""Validate and normalize a domain name to lowercase ASCII (IDNA)."""
	value = domain.strip().rstrip(".").lower()
	if not value:
		raise InvalidEntryError("Domain is required")
	try:
		ascii_host = idna.encode(value, uts46=True).decode("ascii")
	except idna.IDNAError as e:
		raise InvalidEntryError(f"Invalid domain: {domain!r}") from e

	if len(ascii_host) > _MAX_HOSTNAME_LENGTH:
		raise InvalidEntryError(f"Domain too long (max {_MAX_HOSTNAME_LENGTH}): {domain!r}")

	for label in ascii_host.split("."):
		if not _HOST_LABEL_RE.fullmatch(label):
			raise InvalidEntryError(f"Invalid domain label: {label!r}")
		if label.startswith("-") or label.endswith("-"):
			raise InvalidEntryError(f"Invalid domain label: {label!r}")
	return ascii_host


def validate_pattern(pattern: str) -> str:
	"""Check that a pattern compiles as a regular expression."""
	if not pattern:
		raise InvalidEntryError("Pattern is required")
	if len(pattern) > _MAX_PATTERN_LENGTH:
		raise InvalidEntryError(f"Pattern too long (max {_MAX_PATTERN_LENGTH})")
	try:
		re.compile(pattern)
	except re.error as e:
		raise InvalidEntryError(f"Invalid pattern: {e}") from e
	return pattern


def validate_entry(domain_list: DomainList, value: str) -> str:
	"""Return the canonical form of ``value`` for ``domain_list``.

	Domains are normalized; patterns are kept verbatim.
	"""
	if domain_list is DomainList.PATTERN:
		return validate_pattern(value)
	return normalize_domain(value)
