"""
HTTP routes: the question page, the ask endpoint and the health check.

These routes own the HTTP lifecycle and configuration lookup; the table
loading and inference work happens in TableQAService.
"""

from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from table_qa.api.dependencies import get_service, get_settings
from table_qa.api.models import AskRequest, ErrorResponse, HealthResponse
from table_qa.config import Settings
from table_qa.models.answer import Answer
from table_qa.service import TableQAService

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/", response_class=HTMLResponse, summary="Question page")
async def index(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the page with the question box."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"app_name": settings.APP_NAME, "version": settings.APP_VERSION},
    )


@router.post(
    "/ask",
    response_model=Answer,
    status_code=status.HTTP_200_OK,
    summary="Ask a question about the dataset",
    description="""
    Answer a natural-language question about the configured CSV dataset.

    The CSV file is read fresh for every request and sent, together with
    the question, to the hosted table-question-answering model.
    """,
    responses={
        200: {"description": "Answer from the model"},
        400: {"model": ErrorResponse, "description": "Invalid request or empty query"},
        500: {"model": ErrorResponse, "description": "Dataset unreadable or credential missing"},
        502: {"model": ErrorResponse, "description": "Inference provider failed or unreachable"},
        504: {"model": ErrorResponse, "description": "Inference provider timed out"},
    },
)
async def ask(
    body: AskRequest,
    service: TableQAService = Depends(get_service),
    settings: Settings = Depends(get_settings),
) -> Answer:
    """
    Answer a question about the dataset.

    Args:
        body: AskRequest with the query
        service: Table QA service (injected)
        settings: Application settings (injected)

    Returns:
        Answer from the model
    """
    logger.info("Ask request received", query_length=len(body.query))

    return await service.ask_file(
        settings.TABLE_CSV_PATH,
        body.query,
        settings.HUGGINGFACE_TOKEN,
        timeout=settings.INFERENCE_TIMEOUT,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Dataset readable and credential configured"},
        503: {"description": "Service cannot answer questions"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Check that the service can answer questions.

    Reports whether the CSV source is readable and a credential is set.
    The credential itself is never included.
    """
    checks = {}
    healthy = True

    csv_path = Path(settings.TABLE_CSV_PATH)
    if csv_path.is_file():
        checks["table_source"] = "ok"
    else:
        checks["table_source"] = f"missing ({csv_path})"
        healthy = False

    if settings.HUGGINGFACE_TOKEN.strip():
        checks["credential"] = "configured"
    else:
        checks["credential"] = "missing"
        healthy = False

    health_status = "healthy" if healthy else "unhealthy"
    logger.info("Health check", status=health_status, checks=checks)

    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        checks=checks,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
