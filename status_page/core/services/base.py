"""Base service class for business logic."""

from __future__ import annotations

import logging

from status_page.infra.logging import get_lazy_logger


class BaseService:
    """Base class for feature services.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR
        - self._lazy: Lazy logger for DEBUG (callables evaluated only when enabled)

    Example:
        class IncidentService(BaseService):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__()
                self._session = session
    """

    def __init__(self) -> None:
        class_name = self.__class__.__name__
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)
