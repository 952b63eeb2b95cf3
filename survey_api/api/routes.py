"""HTTP routes adapting the framework-independent controllers to FastAPI."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from ..config import get_settings
from ..infra.rate_limiter import build_rate_limiter
from ..metrics import record_login, record_signup
from ..presentation.controllers import AccountResponse, TokenResponse
from ..presentation.errors import InvalidParamError
from ..presentation.http import HttpRequest, HttpResponse
from .factories import Controllers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

settings = get_settings()
rate_limiter = build_rate_limiter(settings)


def get_controllers(request: Request) -> Controllers:
    """Resolve the wired controllers stored on the FastAPI application state."""
    controllers: Controllers = request.app.state.controllers
    return controllers


def _unwrap(response: HttpResponse) -> Any:
    """Return the success body or raise the matching ``HTTPException``."""
    if response.status_code >= 400:
        raise HTTPException(status_code=response.status_code, detail=str(response.body))
    return response.body


def _json_object(payload: Any) -> dict[str, Any]:
    """Return the request body as a dict; any other JSON value is a 400."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(InvalidParamError("body"))
        )
    return payload


def _rate_limited() -> HTTPException:
    return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="rate limited")


def require_admin(
    request: Request,
    controllers: Controllers = Depends(get_controllers),
) -> str:
    """Authorise the request through ``x-access-token`` and return the account id."""
    response = controllers.admin_auth.handle(HttpRequest(headers=dict(request.headers)))
    return _unwrap(response)["account_id"]


@router.post("/signup", response_model=AccountResponse)
def signup(
    request: Request,
    payload: Any = Body(default=None),
    controllers: Controllers = Depends(get_controllers),
) -> AccountResponse:
    """Register an account and return its public representation."""
    body = _json_object(payload)
    client = request.client.host if request.client else "unknown"
    if not rate_limiter.allow(f"signup:{client}"):
        record_signup(status.HTTP_429_TOO_MANY_REQUESTS)
        raise _rate_limited()
    response = controllers.signup.handle(HttpRequest(body=body))
    record_signup(response.status_code)
    return _unwrap(response)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: Any = Body(default=None),
    controllers: Controllers = Depends(get_controllers),
) -> TokenResponse:
    """Exchange email and password for an access token."""
    body = _json_object(payload)
    email = str(body.get("email") or "").lower()
    if not rate_limiter.allow(f"login:{email}"):
        record_login(status.HTTP_429_TOO_MANY_REQUESTS)
        raise _rate_limited()
    response = controllers.login.handle(HttpRequest(body=body))
    record_login(response.status_code)
    return _unwrap(response)


@router.post("/surveys", status_code=status.HTTP_204_NO_CONTENT)
def add_survey(
    payload: Any = Body(default=None),
    account_id: str = Depends(require_admin),
    controllers: Controllers = Depends(get_controllers),
) -> Response:
    """Create a survey; restricted to admin accounts."""
    body = _json_object(payload)
    _unwrap(controllers.add_survey.handle(HttpRequest(body=body)))
    logger.info("survey created by account %s", account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
