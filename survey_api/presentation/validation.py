"""Request body validators composed per route."""

from __future__ import annotations

from typing import Any, Iterable, Protocol

from email_validator import EmailNotValidError, validate_email

from .errors import InvalidParamError, MissingParamError


class Validation(Protocol):
    def validate(self, data: dict[str, Any]) -> Exception | None:
        """Return the first problem found in ``data`` or ``None``."""
        ...


class EmailValidator(Protocol):
    def is_valid(self, email: str) -> bool:
        ...


class EmailValidatorAdapter:
    """Syntax-only email check; deliverability lookups are disabled."""

    def is_valid(self, email: str) -> bool:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True


class RequiredFieldValidation:
    def __init__(self, field_name: str) -> None:
        self._field_name = field_name

    def validate(self, data: dict[str, Any]) -> Exception | None:
        value = data.get(self._field_name)
        if value is None or value == "" or value == []:
            return MissingParamError(self._field_name)
        return None


class StringFieldValidation:
    """Reject present values that are not JSON strings."""

    def __init__(self, field_name: str) -> None:
        self._field_name = field_name

    def validate(self, data: dict[str, Any]) -> Exception | None:
        value = data.get(self._field_name)
        if value is not None and not isinstance(value, str):
            return InvalidParamError(self._field_name)
        return None


class CompareFieldsValidation:
    def __init__(self, field_name: str, field_to_compare_name: str) -> None:
        self._field_name = field_name
        self._field_to_compare_name = field_to_compare_name

    def validate(self, data: dict[str, Any]) -> Exception | None:
        if data.get(self._field_name) != data.get(self._field_to_compare_name):
            return InvalidParamError(self._field_to_compare_name)
        return None


class EmailValidation:
    def __init__(self, field_name: str, email_validator: EmailValidator) -> None:
        self._field_name = field_name
        self._email_validator = email_validator

    def validate(self, data: dict[str, Any]) -> Exception | None:
        value = data.get(self._field_name)
        if not isinstance(value, str) or not self._email_validator.is_valid(value):
            return InvalidParamError(self._field_name)
        return None


class SurveyAnswersValidation:
    """Answers must be a list of objects with a non-empty string ``answer``.

    ``image`` is optional but must be a string when given.
    """

    def __init__(self, field_name: str = "answers") -> None:
        self._field_name = field_name

    def validate(self, data: dict[str, Any]) -> Exception | None:
        answers = data.get(self._field_name)
        if not isinstance(answers, list):
            return InvalidParamError(self._field_name)
        for item in answers:
            if not isinstance(item, dict):
                return InvalidParamError(self._field_name)
            answer, image = item.get("answer"), item.get("image")
            if not isinstance(answer, str) or not answer:
                return InvalidParamError(self._field_name)
            if image is not None and not isinstance(image, str):
                return InvalidParamError(self._field_name)
        return None


class ValidationComposite:
    def __init__(self, validations: Iterable[Validation]) -> None:
        self._validations = list(validations)

    def validate(self, data: dict[str, Any]) -> Exception | None:
        for validation in self._validations:
            error = validation.validate(data)
            if error is not None:
                return error
        return None
