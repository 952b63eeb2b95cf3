"""Credential check and access token issuance."""

from __future__ import annotations

from ..domain.account import Credentials
from ..domain.contracts import AuthenticationResult, AuthOutcome
from .protocols import (
    Encrypter,
    HashComparer,
    LoadAccountByEmailRepository,
    UpdateAccessTokenRepository,
)


class DbAuthentication:
    """Verify credentials against the stored hash and persist a fresh access token.

    Errors raised by any collaborator propagate to the caller untouched. A token
    that was generated but failed to persist is simply discarded.
    """

    def __init__(
        self,
        load_account_by_email_repository: LoadAccountByEmailRepository,
        hash_comparer: HashComparer,
        encrypter: Encrypter,
        update_access_token_repository: UpdateAccessTokenRepository,
    ) -> None:
        self._load_account_by_email_repository = load_account_by_email_repository
        self._hash_comparer = hash_comparer
        self._encrypter = encrypter
        self._update_access_token_repository = update_access_token_repository

    def auth(self, credentials: Credentials) -> AuthenticationResult:
        account = self._load_account_by_email_repository.load_by_email(credentials.email)
        if account is None:
            return AuthenticationResult(AuthOutcome.unknown_account)

        if not self._hash_comparer.compare(credentials.password, account.password):
            return AuthenticationResult(AuthOutcome.invalid_password)

        access_token = self._encrypter.encrypt(account.account_id)
        self._update_access_token_repository.update_access_token(account.account_id, access_token)
        return AuthenticationResult(AuthOutcome.success, access_token)
