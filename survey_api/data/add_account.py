from __future__ import annotations

from ..domain.account import Account, AddAccountInput
from .protocols import AddAccountRepository, Hasher


class DbAddAccount:
    """Create an account, storing only the hashed password."""

    def __init__(self, hasher: Hasher, add_account_repository: AddAccountRepository) -> None:
        self._hasher = hasher
        self._add_account_repository = add_account_repository

    def add(self, data: AddAccountInput) -> Account:
        hashed_password = self._hasher.hash(data.password)
        return self._add_account_repository.add(
            AddAccountInput(name=data.name, email=data.email, password=hashed_password)
        )
