from __future__ import annotations

from survey_api.api.factories import (
    make_add_survey_validation,
    make_login_validation,
    make_signup_validation,
)
from survey_api.presentation.errors import InvalidParamError, MissingParamError
from survey_api.presentation.validation import (
    CompareFieldsValidation,
    EmailValidation,
    EmailValidatorAdapter,
    RequiredFieldValidation,
    StringFieldValidation,
    SurveyAnswersValidation,
    ValidationComposite,
)


class EmailValidatorStub:
    def __init__(self, valid: bool = True) -> None:
        self.valid = valid
        self.calls: list[str] = []

    def is_valid(self, email: str) -> bool:
        self.calls.append(email)
        return self.valid


def test_required_field_reports_missing_field():
    error = RequiredFieldValidation("field").validate({"name": "any_value"})
    assert error == MissingParamError("field")
    assert str(error) == "Missing param: field"


def test_required_field_passes_when_present():
    assert RequiredFieldValidation("field").validate({"field": "any_value"}) is None


def test_required_field_treats_empty_string_as_missing():
    assert RequiredFieldValidation("field").validate({"field": ""}) == MissingParamError("field")


def test_compare_fields_reports_mismatch_on_second_field():
    validation = CompareFieldsValidation("password", "passwordConfirmation")
    error = validation.validate({"password": "123", "passwordConfirmation": "456"})
    assert error == InvalidParamError("passwordConfirmation")
    assert validation.validate({"password": "123", "passwordConfirmation": "123"}) is None


def test_email_validation_calls_validator_with_email():
    validator = EmailValidatorStub()
    assert EmailValidation("email", validator).validate({"email": "any_email@mail.com"}) is None
    assert validator.calls == ["any_email@mail.com"]


def test_email_validation_reports_invalid_email():
    error = EmailValidation("email", EmailValidatorStub(valid=False)).validate({"email": "x"})
    assert error == InvalidParamError("email")


def test_email_validator_adapter():
    adapter = EmailValidatorAdapter()
    assert adapter.is_valid("valid_email@mail.com")
    assert not adapter.is_valid("invalid_email")
    assert not adapter.is_valid("missing@")


def test_composite_returns_first_error():
    composite = ValidationComposite(
        [RequiredFieldValidation("a"), RequiredFieldValidation("b")]
    )
    assert composite.validate({}) == MissingParamError("a")
    assert composite.validate({"a": 1}) == MissingParamError("b")
    assert composite.validate({"a": 1, "b": 2}) is None


def test_signup_validation_checks_fields_in_order():
    validation = make_signup_validation()
    body = {
        "name": "any_name",
        "email": "any_email@mail.com",
        "password": "123",
        "passwordConfirmation": "123",
    }
    assert validation.validate(body) is None
    assert validation.validate({**body, "name": None}) == MissingParamError("name")
    assert validation.validate({**body, "passwordConfirmation": "456"}) == InvalidParamError(
        "passwordConfirmation"
    )
    assert validation.validate({**body, "email": "invalid"}) == InvalidParamError("email")


def test_login_validation():
    validation = make_login_validation()
    assert validation.validate({"password": "x"}) == MissingParamError("email")
    assert validation.validate({"email": "any_email@mail.com"}) == MissingParamError("password")
    assert validation.validate({"email": "any_email@mail.com", "password": "x"}) is None


def test_add_survey_validation_requires_well_formed_answers():
    validation = make_add_survey_validation()
    assert validation.validate({"answers": [{"answer": "a"}]}) == MissingParamError("question")
    assert validation.validate({"question": "q"}) == MissingParamError("answers")
    assert validation.validate({"question": "q", "answers": "a"}) == InvalidParamError("answers")
    assert validation.validate({"question": "q", "answers": [{"image": "i"}]}) == InvalidParamError(
        "answers"
    )
    assert validation.validate({"question": "q", "answers": [{"answer": "a"}]}) is None


def test_string_field_rejects_other_json_types():
    validation = StringFieldValidation("password")
    assert validation.validate({"password": 12345678}) == InvalidParamError("password")
    assert validation.validate({"password": True}) == InvalidParamError("password")
    assert validation.validate({"password": ["123"]}) == InvalidParamError("password")
    assert validation.validate({"password": "123"}) is None
    assert validation.validate({}) is None


def test_factories_reject_non_string_text_fields():
    signup = {
        "name": "any_name",
        "email": "any_email@mail.com",
        "password": 123,
        "passwordConfirmation": 123,
    }
    assert make_signup_validation().validate(signup) == InvalidParamError("password")
    assert make_signup_validation().validate({**signup, "email": 1, "password": "1"}) == (
        InvalidParamError("email")
    )
    assert make_login_validation().validate({"email": "any_email@mail.com", "password": 1}) == (
        InvalidParamError("password")
    )
    assert make_add_survey_validation().validate(
        {"question": 7, "answers": [{"answer": "a"}]}
    ) == InvalidParamError("question")


def test_survey_answers_require_string_answer_and_image():
    validation = SurveyAnswersValidation("answers")
    assert validation.validate({"answers": [{"answer": 1}]}) == InvalidParamError("answers")
    assert validation.validate({"answers": [{"answer": "a", "image": 5}]}) == InvalidParamError(
        "answers"
    )
    assert validation.validate({"answers": ["a"]}) == InvalidParamError("answers")
    assert validation.validate({"answers": [{"answer": "a", "image": None}]}) is None
