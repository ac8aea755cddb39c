#!/usr/bin/env python3
#
# sinkhole/lists/models.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Domain list selectors and request payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class DomainList(str, Enum):
	"""Selects one of the three independent domain lists."""
	ALLOW = "allow"
	DENY = "deny"
	PATTERN = "pattern"


class ListEntryCreate(BaseModel):
	"""Payload for adding a value to a domain list."""
	value: str = Field(..., min_length=1, max_length=1024)

	@field_validator("value")
	@classmethod
	def strip_value(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise ValueError("Value must not be blank")
		return v
