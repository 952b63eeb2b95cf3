"""Repository tests against a recording stand-in for the psycopg pool."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone

import pytest
from psycopg import errors
from psycopg.types.json import Json

from survey_api.domain.account import Account, AddAccountInput
from survey_api.domain.errors import EmailInUseError
from survey_api.domain.survey import AddSurveyInput, SurveyAnswer
from survey_api.infra.repository import (
    AccountRepository,
    LogErrorRepository,
    SurveyRepository,
    ensure_schema,
)

ROW = ("any_id", "any_name", "any_email@mail.com", "hashed_password", None, None)


class RecordingCursor:
    def __init__(self, pool: "RecordingPool") -> None:
        self._pool = pool

    def __enter__(self) -> "RecordingCursor":
        return self

    def __exit__(self, *exc) -> None:
        return None

    def execute(self, query, params=None) -> None:
        if self._pool.error is not None:
            raise self._pool.error
        self._pool.executed.append((" ".join(query.split()), params))

    def fetchone(self):
        return self._pool.rows.pop(0) if self._pool.rows else None


class RecordingConnection:
    def __init__(self, pool: "RecordingPool") -> None:
        self._pool = pool

    def cursor(self, row_factory=None) -> RecordingCursor:
        return RecordingCursor(self._pool)

    def commit(self) -> None:
        self._pool.commits += 1


class RecordingPool:
    def __init__(self, rows=None, error: Exception | None = None) -> None:
        self.rows = list(rows or [])
        self.error = error
        self.executed: list[tuple[str, object]] = []
        self.commits = 0

    @contextmanager
    def connection(self):
        yield RecordingConnection(self)


def test_ensure_schema_creates_tables():
    pool = RecordingPool()
    ensure_schema(pool)
    (query, _), = pool.executed
    assert "CREATE TABLE IF NOT EXISTS accounts" in query
    assert "email TEXT NOT NULL UNIQUE" in query
    assert pool.commits == 1


def test_add_account_returns_mapped_row():
    pool = RecordingPool(rows=[ROW])
    account = AccountRepository(pool).add(
        AddAccountInput(name="any_name", email="any_email@mail.com", password="hashed_password")
    )

    assert account == Account(
        account_id="any_id",
        name="any_name",
        email="any_email@mail.com",
        password="hashed_password",
    )
    query, params = pool.executed[0]
    assert query.startswith("INSERT INTO accounts")
    assert params[1:] == ("any_name", "any_email@mail.com", "hashed_password")
    assert pool.commits == 1


def test_add_account_maps_unique_violation_to_email_in_use():
    pool = RecordingPool(error=errors.UniqueViolation("duplicate key"))
    with pytest.raises(EmailInUseError):
        AccountRepository(pool).add(
            AddAccountInput(name="any_name", email="any_email@mail.com", password="x")
        )


def test_load_by_email_returns_none_when_missing():
    assert AccountRepository(RecordingPool()).load_by_email("missing@mail.com") is None


def test_load_by_email_maps_row():
    account = AccountRepository(RecordingPool(rows=[ROW])).load_by_email("any_email@mail.com")
    assert account is not None
    assert account.account_id == "any_id"


def test_update_access_token():
    pool = RecordingPool()
    AccountRepository(pool).update_access_token("any_id", "any_token")
    assert pool.executed == [
        ("UPDATE accounts SET access_token = %s WHERE account_id = %s", ("any_token", "any_id"))
    ]
    assert pool.commits == 1


def test_load_by_token_filters_on_role_or_admin():
    row = ROW[:4] + ("any_token", "admin")
    pool = RecordingPool(rows=[row])
    account = AccountRepository(pool).load_by_token("any_token", "admin")

    assert account is not None and account.role == "admin"
    query, params = pool.executed[0]
    assert "role IS NOT DISTINCT FROM %s OR role = 'admin'" in query
    assert params == ("any_token", "admin")


def test_add_survey_serialises_answers_as_json():
    pool = RecordingPool()
    date = datetime(2024, 1, 1, tzinfo=timezone.utc)
    SurveyRepository(pool).add(
        AddSurveyInput(
            question="any_question",
            answers=[SurveyAnswer(answer="any_answer", image="any_image")],
            date=date,
        )
    )

    (query, params), = pool.executed
    assert query.startswith("INSERT INTO surveys")
    assert params[1] == "any_question"
    assert isinstance(params[2], Json)
    assert params[2].obj == [{"answer": "any_answer", "image": "any_image"}]
    assert params[3] == date


def test_log_error_inserts_stack():
    pool = RecordingPool()
    LogErrorRepository(pool).log_error("Traceback ...")
    assert pool.executed == [("INSERT INTO error_log (stack) VALUES (%s)", ("Traceback ...",))]
