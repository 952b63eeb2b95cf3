"""Errors returned by controllers as HTTP response bodies."""

from __future__ import annotations


class MissingParamError(Exception):
    def __init__(self, param_name: str) -> None:
        super().__init__(f"Missing param: {param_name}")
        self.param_name = param_name

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.param_name == self.param_name

    __hash__ = Exception.__hash__


class InvalidParamError(Exception):
    def __init__(self, param_name: str) -> None:
        super().__init__(f"Invalid param: {param_name}")
        self.param_name = param_name

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.param_name == self.param_name

    __hash__ = Exception.__hash__


class UnauthorizedError(Exception):
    def __init__(self) -> None:
        super().__init__("Unauthorized")


class AccessDeniedError(Exception):
    def __init__(self) -> None:
        super().__init__("Access denied")


class ServerError(Exception):
    """Internal failure; ``stack`` keeps the formatted traceback for the error log."""

    def __init__(self, stack: str | None = None) -> None:
        super().__init__("Internal server error")
        self.stack = stack or ""
