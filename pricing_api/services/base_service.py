"""
Base service interface for business logic.
"""

import logging
from abc import ABC, abstractmethod


class BaseService(ABC):
    """Abstract base service interface."""

    def __init__(self, repository=None):
        """Initialize service with repository dependency."""
        self.repository = repository
        self.logger = logging.getLogger(self.__class__.__module__)

    @abstractmethod
    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters."""
        pass
