from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Account:
    """Registered user; ``password`` always holds the one-way hash."""

    account_id: str
    name: str
    email: str
    password: str
    access_token: str | None = None
    role: str | None = None


@dataclass(slots=True)
class AddAccountInput:
    """Signup data handed to the add-account use case and its repository."""

    name: str
    email: str
    password: str


@dataclass(slots=True)
class Credentials:
    email: str
    password: str
