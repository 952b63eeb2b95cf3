from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class SurveyAnswer:
    answer: str
    image: str | None = None


@dataclass(slots=True)
class AddSurveyInput:
    """Survey question and its selectable answers, stamped with a creation date."""

    question: str
    answers: list[SurveyAnswer] = field(default_factory=list)
    date: datetime | None = None
