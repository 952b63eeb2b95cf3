"""Domain errors raised by repositories and surfaced to controllers."""

from __future__ import annotations


class EmailInUseError(Exception):
    """Raised when an account with the same email already exists."""

    def __init__(self, email: str = "") -> None:
        super().__init__("The received email is already in use")
        self.email = email
