"""
Base service class.

Services sit between the entry points (CLI, API) and the repositories.
"""

import logging
from abc import ABC
from typing import Optional


class BaseService(ABC):
    """
    Abstract base class for all services.

    Provides a per-class logger that can be overridden for tests.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger
