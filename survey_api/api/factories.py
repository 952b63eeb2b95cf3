"""Composition root wiring adapters, use cases and controllers together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..config import Settings
from ..data.add_account import DbAddAccount
from ..data.add_survey import DbAddSurvey
from ..data.authentication import DbAuthentication
from ..data.load_account_by_token import DbLoadAccountByToken
from ..data.protocols import (
    AddAccountRepository,
    AddSurveyRepository,
    LoadAccountByEmailRepository,
    LoadAccountByTokenRepository,
    LogErrorRepository,
    UpdateAccessTokenRepository,
)
from ..infra.cryptography import BcryptAdapter, JwtAdapter
from ..presentation.controllers import (
    AddSurveyController,
    Controller,
    LoginController,
    SignUpController,
)
from ..presentation.middlewares import AuthMiddleware
from ..presentation.validation import (
    CompareFieldsValidation,
    EmailValidation,
    EmailValidatorAdapter,
    RequiredFieldValidation,
    StringFieldValidation,
    SurveyAnswersValidation,
    Validation,
    ValidationComposite,
)
from .decorators import LogControllerDecorator


class AccountStore(
    AddAccountRepository,
    LoadAccountByEmailRepository,
    UpdateAccessTokenRepository,
    LoadAccountByTokenRepository,
    Protocol,
):
    """Every account capability, as implemented by ``AccountRepository``."""


@dataclass(slots=True)
class Controllers:
    signup: Controller
    login: Controller
    add_survey: Controller
    admin_auth: AuthMiddleware


def _text_fields(*names: str) -> list[Validation]:
    """Presence then string-type checks for each named field."""
    validations: list[Validation] = [RequiredFieldValidation(name) for name in names]
    validations.extend(StringFieldValidation(name) for name in names)
    return validations


def make_signup_validation() -> ValidationComposite:
    validations = _text_fields("name", "email", "password", "passwordConfirmation")
    validations.append(CompareFieldsValidation("password", "passwordConfirmation"))
    validations.append(EmailValidation("email", EmailValidatorAdapter()))
    return ValidationComposite(validations)


def make_login_validation() -> ValidationComposite:
    validations = _text_fields("email", "password")
    validations.append(EmailValidation("email", EmailValidatorAdapter()))
    return ValidationComposite(validations)


def make_add_survey_validation() -> ValidationComposite:
    validations = _text_fields("question")
    validations.append(RequiredFieldValidation("answers"))
    validations.append(SurveyAnswersValidation("answers"))
    return ValidationComposite(validations)


def make_jwt_adapter(settings: Settings) -> JwtAdapter:
    return JwtAdapter(
        settings.jwt_secret,
        issuer=settings.jwt_issuer,
        ttl_seconds=settings.jwt_ttl_seconds,
    )


def make_signup_controller(
    settings: Settings,
    account_repository: AccountStore,
    log_error_repository: LogErrorRepository,
) -> Controller:
    add_account = DbAddAccount(BcryptAdapter(settings.bcrypt_rounds), account_repository)
    controller = SignUpController(add_account, make_signup_validation())
    return LogControllerDecorator(controller, log_error_repository)


def make_login_controller(
    settings: Settings,
    account_repository: AccountStore,
    log_error_repository: LogErrorRepository,
) -> Controller:
    authentication = DbAuthentication(
        account_repository,
        BcryptAdapter(settings.bcrypt_rounds),
        make_jwt_adapter(settings),
        account_repository,
    )
    controller = LoginController(make_login_validation(), authentication)
    return LogControllerDecorator(controller, log_error_repository)


def make_add_survey_controller(
    survey_repository: AddSurveyRepository,
    log_error_repository: LogErrorRepository,
) -> Controller:
    controller = AddSurveyController(make_add_survey_validation(), DbAddSurvey(survey_repository))
    return LogControllerDecorator(controller, log_error_repository)


def make_auth_middleware(
    settings: Settings,
    account_repository: AccountStore,
    role: str | None = None,
) -> AuthMiddleware:
    load_account_by_token = DbLoadAccountByToken(make_jwt_adapter(settings), account_repository)
    return AuthMiddleware(load_account_by_token, role)


def build_controllers(
    settings: Settings,
    account_repository: AccountStore,
    survey_repository: AddSurveyRepository,
    log_error_repository: LogErrorRepository,
) -> Controllers:
    """Return every controller the routes need, fully wired."""
    return Controllers(
        signup=make_signup_controller(settings, account_repository, log_error_repository),
        login=make_login_controller(settings, account_repository, log_error_repository),
        add_survey=make_add_survey_controller(survey_repository, log_error_repository),
        admin_auth=make_auth_middleware(settings, account_repository, role="admin"),
    )
