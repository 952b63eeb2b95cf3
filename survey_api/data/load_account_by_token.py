from __future__ import annotations

from ..domain.account import Account
from .protocols import Decrypter, LoadAccountByTokenRepository


class DbLoadAccountByToken:
    """Resolve the account owning a bearer token, optionally restricted to a role."""

    def __init__(
        self,
        decrypter: Decrypter,
        load_account_by_token_repository: LoadAccountByTokenRepository,
    ) -> None:
        self._decrypter = decrypter
        self._load_account_by_token_repository = load_account_by_token_repository

    def load(self, access_token: str, role: str | None = None) -> Account | None:
        if self._decrypter.decrypt(access_token) is None:
            return None
        return self._load_account_by_token_repository.load_by_token(access_token, role)
