"""Controllers translating request bodies into use-case calls."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..domain.account import Account, AddAccountInput, Credentials
from ..domain.contracts import AddAccount, AddSurvey, Authentication
from ..domain.errors import EmailInUseError
from ..domain.survey import AddSurveyInput, SurveyAnswer
from .http import (
    HttpRequest,
    HttpResponse,
    bad_request,
    forbidden,
    no_content,
    ok,
    server_error,
    unauthorized,
)
from .validation import Validation


class Controller(Protocol):
    def handle(self, request: HttpRequest) -> HttpResponse:
        ...


class AccountResponse(BaseModel):
    """Public representation of an `Account`; the password hash is never exposed."""

    id: str
    name: str
    email: EmailStr

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls(id=account.account_id, name=account.name, email=account.email)


class TokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")


class SignUpController:
    def __init__(self, add_account: AddAccount, validation: Validation) -> None:
        self._add_account = add_account
        self._validation = validation

    def handle(self, request: HttpRequest) -> HttpResponse:
        try:
            error = self._validation.validate(request.body)
            if error is not None:
                return bad_request(error)
            account = self._add_account.add(
                AddAccountInput(
                    name=request.body["name"],
                    email=request.body["email"],
                    password=request.body["password"],
                )
            )
            return ok(AccountResponse.from_domain(account))
        except EmailInUseError as exc:
            return forbidden(exc)
        except Exception as exc:
            return server_error(exc)


class LoginController:
    """Exchange credentials for an access token.

    Unknown emails and wrong passwords both answer 401 so callers cannot tell
    which accounts exist.
    """

    def __init__(self, validation: Validation, authentication: Authentication) -> None:
        self._validation = validation
        self._authentication = authentication

    def handle(self, request: HttpRequest) -> HttpResponse:
        try:
            error = self._validation.validate(request.body)
            if error is not None:
                return bad_request(error)
            result = self._authentication.auth(
                Credentials(email=request.body["email"], password=request.body["password"])
            )
            if not result.authenticated:
                return unauthorized()
            return ok(TokenResponse(access_token=result.access_token))
        except Exception as exc:
            return server_error(exc)


class AddSurveyController:
    def __init__(self, validation: Validation, add_survey: AddSurvey) -> None:
        self._validation = validation
        self._add_survey = add_survey

    def handle(self, request: HttpRequest) -> HttpResponse:
        try:
            error = self._validation.validate(request.body)
            if error is not None:
                return bad_request(error)
            answers = [
                SurveyAnswer(answer=item["answer"], image=item.get("image"))
                for item in request.body["answers"]
            ]
            self._add_survey.add(
                AddSurveyInput(
                    question=request.body["question"],
                    answers=answers,
                    date=datetime.now(timezone.utc),
                )
            )
            return no_content()
        except Exception as exc:
            return server_error(exc)
