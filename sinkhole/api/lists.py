#!/usr/bin/env python3
#
# sinkhole/api/lists.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Allow-list, deny-list and pattern-list API routes."""

import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from starlette.concurrency import run_in_threadpool

from ..lists import DomainList, ListEntryCreate, ListRepository, ListStorageError
from ..lists.validation import InvalidEntryError, validate_entry
from ..utils.deps import get_list_repository
from ..utils.rate_limit import RATE_LIMIT_LIST_READ, RATE_LIMIT_LIST_WRITE, limiter
from .auth import require_api_key
from .response import ok_response

_log = logging.getLogger(__name__)

router = APIRouter(tags=["lists"], dependencies=[Depends(require_api_key)])


async def _call_repository(method: Callable[..., Any], *args: Any) -> Any:
	"""Run a blocking repository call off the event loop."""
	try:
		return await run_in_threadpool(method, *args)
	except ListStorageError as exc:
		raise HTTPException(status_code=500, detail="List storage failure") from exc


def _validated(domain_list: DomainList, value: str) -> str:
	try:
		return validate_entry(domain_list, value)
	except InvalidEntryError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc


def _lookup_values(domain_list: DomainList, value: str) -> list[str]:
	"""Values a lookup matches: the value as given, then its canonical form.

	Stored rows are matched exactly, so rows that predate normalization stay
	reachable under their stored spelling.
	"""
	values = [value]
	try:
		canonical = validate_entry(domain_list, value)
	except InvalidEntryError:
		return values
	if canonical != value:
		values.append(canonical)
	return values


@router.get("/{domain_list}")
@limiter.limit(RATE_LIMIT_LIST_READ)
async def get_list(
	request: Request,
	domain_list: DomainList,
	repo: ListRepository = Depends(get_list_repository),
):
	"""Get every enabled entry of a list."""
	values = await _call_repository(repo.get, domain_list)
	return ok_response(data=values, count=len(values))


@router.get("/{domain_list}/contains")
@limiter.limit(RATE_LIMIT_LIST_READ)
async def list_contains(
	request: Request,
	domain_list: DomainList,
	value: str = Query(..., min_length=1, max_length=1024),
	repo: ListRepository = Depends(get_list_repository),
):
	"""Check whether a list holds a value."""
	found = False
	for candidate in _lookup_values(domain_list, value):
		if await _call_repository(repo.contains, domain_list, candidate):
			found = True
			break
	return ok_response(data={"value": value, "contains": found})


@router.post("/{domain_list}", status_code=201)
@limiter.limit(RATE_LIMIT_LIST_WRITE)
async def add_to_list(
	request: Request,
	domain_list: DomainList,
	payload: ListEntryCreate,
	repo: ListRepository = Depends(get_list_repository),
):
	"""Add a value to a list. Adding an existing value succeeds."""
	canonical = _validated(domain_list, payload.value)
	await _call_repository(repo.add, domain_list, canonical)
	return ok_response(
		message=f"Added to {domain_list.value} list",
		data={"value": canonical},
	)


@router.delete("/{domain_list}/{value:path}")
@limiter.limit(RATE_LIMIT_LIST_WRITE)
async def remove_from_list(
	request: Request,
	domain_list: DomainList,
	value: str,
	repo: ListRepository = Depends(get_list_repository),
):
	"""Remove a value from a list. Removing an absent value succeeds.

	Both the value as given and its canonical form are removed.
	"""
	for candidate in _lookup_values(domain_list, value):
		await _call_repository(repo.remove, domain_list, candidate)
	return ok_response(
		message=f"Removed from {domain_list.value} list",
		data={"value": value},
	)
