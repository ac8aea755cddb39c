#!/usr/bin/env python3
#
# sinkhole/utils/request_id.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Request ID middleware for tracing."""

from __future__ import annotations

import re
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied IDs end up in logs; accept only short, plain tokens
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestIDMiddleware(BaseHTTPMiddleware):
	"""Attach a request ID to each request and echo it on the response."""

	async def dispatch(self, request: Request, call_next: Callable) -> Response:
		supplied = request.headers.get(REQUEST_ID_HEADER, "")
		request_id = supplied if _REQUEST_ID_RE.fullmatch(supplied) else uuid.uuid4().hex
		request.state.request_id = request_id

		response = await call_next(request)
		response.headers[REQUEST_ID_HEADER] = request_id
		return response
