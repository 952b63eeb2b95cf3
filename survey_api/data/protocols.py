"""Capabilities the use cases depend on; infra adapters implement them."""

from __future__ import annotations

from typing import Protocol

from ..domain.account import Account, AddAccountInput
from ..domain.survey import AddSurveyInput


class Hasher(Protocol):
    def hash(self, value: str) -> str:
        ...


class HashComparer(Protocol):
    def compare(self, value: str, hashed: str) -> bool:
        ...


class Encrypter(Protocol):
    def encrypt(self, value: str) -> str:
        ...


class Decrypter(Protocol):
    def decrypt(self, token: str) -> str | None:
        """Return the value bound to ``token`` or ``None`` when it cannot be verified."""
        ...


class AddAccountRepository(Protocol):
    def add(self, data: AddAccountInput) -> Account:
        """Persist the account and return it with its generated identifier."""
        ...


class LoadAccountByEmailRepository(Protocol):
    def load_by_email(self, email: str) -> Account | None:
        ...


class UpdateAccessTokenRepository(Protocol):
    def update_access_token(self, account_id: str, token: str) -> None:
        ...


class LoadAccountByTokenRepository(Protocol):
    def load_by_token(self, token: str, role: str | None = None) -> Account | None:
        """Return the account holding ``token`` whose role matches ``role`` or is admin."""
        ...


class AddSurveyRepository(Protocol):
    def add(self, data: AddSurveyInput) -> None:
        ...


class LogErrorRepository(Protocol):
    def log_error(self, stack: str) -> None:
        ...
