"""
Response helpers shared by the API views.

Successful responses use ``{"success": true, "message"?, "data", "count"?}``;
errors are shaped by ``core.exceptions.api_exception_handler``.
"""
from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.response import Response

from core.serializers.common import strip_prefixes


def ok(data: Any = None, message: str | None = None, *, code: int = status.HTTP_200_OK, **extra) -> Response:
    body: dict[str, Any] = {'success': True}
    if message:
        body['message'] = message
    body['data'] = data
    body.update(extra)
    return Response(body, status=code)


def ok_list(rows: list, message: str | None = None, **extra) -> Response:
    return ok(rows, message, count=len(rows), **extra)


def created(data: Any = None, message: str | None = None, **extra) -> Response:
    return ok(data, message, code=status.HTTP_201_CREATED, **extra)


def request_body(request) -> dict:
    """Request body as a plain dict with dashboard ``FS_``/``FN_`` prefixes removed."""
    data = request.data
    if hasattr(data, 'dict'):
        data = data.dict()
    return strip_prefixes(data or {})
