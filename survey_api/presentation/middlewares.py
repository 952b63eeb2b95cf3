from __future__ import annotations

from ..domain.contracts import LoadAccountByToken
from .errors import AccessDeniedError
from .http import HttpRequest, HttpResponse, forbidden, ok, server_error

ACCESS_TOKEN_HEADER = "x-access-token"


class AuthMiddleware:
    """Resolve the ``x-access-token`` header to an account holding ``role``."""

    def __init__(self, load_account_by_token: LoadAccountByToken, role: str | None = None) -> None:
        self._load_account_by_token = load_account_by_token
        self._role = role

    def handle(self, request: HttpRequest) -> HttpResponse:
        try:
            access_token = request.headers.get(ACCESS_TOKEN_HEADER)
            if access_token:
                account = self._load_account_by_token.load(access_token, self._role)
                if account is not None:
                    return ok({"account_id": account.account_id})
            return forbidden(AccessDeniedError())
        except Exception as exc:
            return server_error(exc)
