"""
Base controller interface for API endpoints.

This module provides the abstract base class for all API controllers in the
pool price analytics service. It enforces consistent patterns and provides
common functionality across all endpoint handlers.

Features:
    - Standardized router initialization
    - Consistent error handling patterns
    - Access to the application configuration built at startup

Architecture:
    All controllers inherit from BaseController and must implement
    _setup_routes() to define endpoint routes and handlers.

Usage:
    ```python
    class MyController(BaseController):
        def _setup_routes(self):
            @self.router.get("/my-endpoint")
            async def my_endpoint():
                return {"message": "Hello World"}
    ```
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from ..config import ApplicationConfig

logger = logging.getLogger(__name__)


def get_app_config(request: Request) -> ApplicationConfig:
    """Dependency returning the configuration created by create_app()."""
    return request.app.state.config


class BaseController(ABC):
    """
    Abstract base controller for consistent API endpoint patterns.

    Attributes:
        router (APIRouter): FastAPI router instance for endpoint registration

    Methods:
        _setup_routes(): Abstract method for route definition (must implement)
        handle_exception(): Standardized exception handling with context
    """

    def __init__(self):
        """
        Initialize controller with FastAPI router.

        Creates a new APIRouter instance and calls _setup_routes() to register
        all endpoint handlers defined by the concrete controller implementation.
        """
        self.router = APIRouter()
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self):
        """Setup routes for this controller."""
        pass

    def handle_exception(self, e: Exception, context: Optional[str] = None) -> None:
        """
        Handle unexpected exceptions consistently across all controllers.

        Classified pipeline errors are rendered by the application's
        exception handler; anything reaching this method becomes an HTTP 500
        with contextual information.

        Args:
            e (Exception): The exception that occurred
            context (Optional[str]): Where the error occurred

        Raises:
            HTTPException: Always raises HTTP 500 with error details
        """
        error_message = f"{context}: {str(e)}" if context else str(e)
        logger.exception(error_message)
        raise HTTPException(status_code=500, detail=error_message)
