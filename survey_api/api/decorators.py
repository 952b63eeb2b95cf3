from __future__ import annotations

import logging

from ..data.protocols import LogErrorRepository
from ..presentation.controllers import Controller
from ..presentation.errors import ServerError
from ..presentation.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class LogControllerDecorator:
    """Wrap a controller and record every server error it produces."""

    def __init__(self, controller: Controller, log_error_repository: LogErrorRepository) -> None:
        self._controller = controller
        self._log_error_repository = log_error_repository

    def handle(self, request: HttpRequest) -> HttpResponse:
        response = self._controller.handle(request)
        if response.status_code == 500:
            stack = response.body.stack if isinstance(response.body, ServerError) else ""
            logger.error("%s failed: %s", type(self._controller).__name__, stack)
            try:
                self._log_error_repository.log_error(stack)
            except Exception:
                logger.exception(
                    "could not persist server error for %s", type(self._controller).__name__
                )
        return response
