"""Use-case contracts consumed by the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .account import Account, AddAccountInput, Credentials
from .survey import AddSurveyInput


class AuthOutcome(str, Enum):
    success = "success"
    unknown_account = "unknown_account"
    invalid_password = "invalid_password"


@dataclass(slots=True, frozen=True)
class AuthenticationResult:
    """Outcome of a login attempt; ``access_token`` is only set on success."""

    outcome: AuthOutcome
    access_token: str | None = None

    @property
    def authenticated(self) -> bool:
        return self.outcome is AuthOutcome.success


class AddAccount(Protocol):
    def add(self, data: AddAccountInput) -> Account:
        ...


class Authentication(Protocol):
    def auth(self, credentials: Credentials) -> AuthenticationResult:
        ...


class LoadAccountByToken(Protocol):
    def load(self, access_token: str, role: str | None = None) -> Account | None:
        ...


class AddSurvey(Protocol):
    def add(self, data: AddSurveyInput) -> None:
        ...
