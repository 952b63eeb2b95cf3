"""Framework-independent request/response types and status helpers."""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import Any

from .errors import ServerError, UnauthorizedError


@dataclass(slots=True)
class HttpRequest:
    body: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class HttpResponse:
    status_code: int
    body: Any = None


def ok(data: Any) -> HttpResponse:
    return HttpResponse(200, data)


def no_content() -> HttpResponse:
    return HttpResponse(204)


def bad_request(error: Exception) -> HttpResponse:
    return HttpResponse(400, error)


def unauthorized() -> HttpResponse:
    return HttpResponse(401, UnauthorizedError())


def forbidden(error: Exception) -> HttpResponse:
    return HttpResponse(403, error)


def server_error(error: BaseException) -> HttpResponse:
    stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return HttpResponse(500, ServerError(stack))
