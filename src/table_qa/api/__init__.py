"""
FastAPI API routes and endpoints.

- routes.py: GET / (question page), POST /ask, GET /health
- dependencies.py: Dependency injection for loader, connector and service
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing
"""

from table_qa.api import dependencies, error_handlers, models
from table_qa.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
