"""
FastAPI application entry point for the Table QA Service.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from table_qa.api.dependencies import get_connector
from table_qa.api.error_handlers import EXCEPTION_HANDLERS
from table_qa.api.middleware import RequestTracingMiddleware
from table_qa.api.routes import router
from table_qa.config import settings
from table_qa.logging_config import configure_logging

# Configure structured logging before the app starts logging
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Table QA Service",
    description="Natural-language questions over a CSV dataset, answered by a hosted TAPAS model",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router)


@app.on_event("startup")
async def startup():
    """Application startup - report configuration (never the credential)."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        inference_url=settings.HF_INFERENCE_URL,
        table_csv_path=settings.TABLE_CSV_PATH,
        credential_configured=bool(settings.HUGGINGFACE_TOKEN.strip()),
    )
    if not settings.HUGGINGFACE_TOKEN.strip():
        logger.warning("HUGGINGFACE_TOKEN is not set, /ask will fail")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close the pooled HTTP client."""
    await get_connector().aclose()
    logger.info("Application shutdown complete")


# Prometheus metrics instrumentation
if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "table_qa.main:app",
        host=settings.HOST,
        port=settings.PORT,
    )
