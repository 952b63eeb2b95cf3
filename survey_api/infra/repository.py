"""Postgres repositories for accounts, surveys and the server error log."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from psycopg import errors
from psycopg.rows import tuple_row
from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from ..domain.account import Account, AddAccountInput
from ..domain.errors import EmailInUseError
from ..domain.survey import AddSurveyInput

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
    account_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    access_token TEXT,
    role TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS accounts_access_token_idx ON accounts (access_token);
CREATE TABLE IF NOT EXISTS surveys (
    survey_id TEXT PRIMARY KEY,
    question TEXT NOT NULL,
    answers JSONB NOT NULL,
    date TIMESTAMPTZ NOT NULL
);
CREATE TABLE IF NOT EXISTS error_log (
    error_id BIGSERIAL PRIMARY KEY,
    stack TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""

_ACCOUNT_COLUMNS = "account_id, name, email, password, access_token, role"


def ensure_schema(pool: ConnectionPool) -> None:
    """Create the tables used by the repositories when they do not exist yet."""
    with pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
            conn.commit()


class AccountRepository:
    """Postgres-backed account persistence used by signup, login and token lookup."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def add(self, data: AddAccountInput) -> Account:
        """Insert the account and return the stored row.

        Raises :class:`EmailInUseError` when the email is already registered.
        """
        account_id = str(uuid.uuid4())
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO accounts (account_id, name, email, password)
                        VALUES (%s, %s, %s, %s)
                        RETURNING {_ACCOUNT_COLUMNS}
                        """,
                        (account_id, data.name, data.email, data.password),
                    )
                    row = cur.fetchone()
                    conn.commit()
        except errors.UniqueViolation as exc:
            raise EmailInUseError(data.email) from exc
        return self._map_record(row)

    def load_by_email(self, email: str) -> Account | None:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email = %s",
                    (email,),
                )
                row = cur.fetchone()
        if not row:
            return None
        return self._map_record(row)

    def update_access_token(self, account_id: str, token: str) -> None:
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "UPDATE accounts SET access_token = %s WHERE account_id = %s",
                    (token, account_id),
                )
                conn.commit()

    def load_by_token(self, token: str, role: str | None = None) -> Account | None:
        """Return the account holding ``token`` when its role is ``role`` or admin."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_ACCOUNT_COLUMNS}
                    FROM accounts
                    WHERE access_token = %s
                      AND (role IS NOT DISTINCT FROM %s OR role = 'admin')
                    """,
                    (token, role),
                )
                row = cur.fetchone()
        if not row:
            return None
        return self._map_record(row)

    def _map_record(self, row: tuple) -> Account:
        return Account(
            account_id=row[0],
            name=row[1],
            email=row[2],
            password=row[3],
            access_token=row[4],
            role=row[5],
        )


class SurveyRepository:
    """Stores surveys with their answers serialised into a JSONB column."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def add(self, data: AddSurveyInput) -> None:
        answers = [{"answer": item.answer, "image": item.image} for item in data.answers]
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO surveys (survey_id, question, answers, date)
                    VALUES (%s, %s, %s, %s)
                    """,
                    (
                        str(uuid.uuid4()),
                        data.question,
                        Json(answers),
                        data.date or datetime.now(timezone.utc),
                    ),
                )
                conn.commit()


class LogErrorRepository:
    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def log_error(self, stack: str) -> None:
        """Record the stack trace of an unexpected server error."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("INSERT INTO error_log (stack) VALUES (%s)", (stack,))
                conn.commit()
