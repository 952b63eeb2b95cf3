from __future__ import annotations

from ..domain.survey import AddSurveyInput
from .protocols import AddSurveyRepository


class DbAddSurvey:
    def __init__(self, add_survey_repository: AddSurveyRepository) -> None:
        self._add_survey_repository = add_survey_repository

    def add(self, data: AddSurveyInput) -> None:
        self._add_survey_repository.add(data)
