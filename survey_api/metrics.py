"""Prometheus counters for account activity."""

from __future__ import annotations

from prometheus_client import Counter

SIGNUPS = Counter(
    "survey_api_signups_total",
    "Signup requests by response status.",
    ["status"],
)
LOGIN_ATTEMPTS = Counter(
    "survey_api_login_attempts_total",
    "Login requests by outcome.",
    ["outcome"],
)

_LOGIN_OUTCOMES = {200: "success", 400: "invalid_request", 401: "unauthorized", 429: "rate_limited"}


def record_login(status_code: int) -> None:
    LOGIN_ATTEMPTS.labels(outcome=_LOGIN_OUTCOMES.get(status_code, "error")).inc()


def record_signup(status_code: int) -> None:
    SIGNUPS.labels(status=str(status_code)).inc()
