from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from enterprise_ledger.core.errors import DomainError, NotFoundError
from enterprise_ledger.core.logging import configure_logging, correlation_id_var
from enterprise_ledger.core.settings import get_app_settings
from enterprise_ledger.schemas.common import ErrorInfo, ErrorResponse, MessageResponse

# Routers
from enterprise_ledger.api.routes.automation import router as automation_router
from enterprise_ledger.api.routes.inventory import router as inventory_router
from enterprise_ledger.api.routes.invoices import router as invoices_router
from enterprise_ledger.api.routes.maintenance import router as maintenance_router
from enterprise_ledger.api.routes.passports import router as passports_router
from enterprise_ledger.api.routes.procurement import router as procurement_router
from enterprise_ledger.api.routes.production import router as production_router
from enterprise_ledger.api.routes.quality import router as quality_router
from enterprise_ledger.api.routes.sales import router as sales_router
from enterprise_ledger.api.routes.system import router as system_router
from enterprise_ledger.api.routes.tasks import router as tasks_router
from enterprise_ledger.api.routes.workforce import router as workforce_router

settings = get_app_settings()

# Configure structured logging once at import
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "System", "description": "System and operational endpoints."},
    {"name": "Health", "description": "Liveness probe."},
    {"name": "Inventory", "description": "Items, BOMs, locations, stock lots and the stock-move journal."},
    {"name": "Production", "description": "Routings, production orders and work orders."},
    {"name": "Quality", "description": "Quality checks and nonconformances."},
    {"name": "Maintenance", "description": "Maintenance orders and logs."},
    {"name": "Procurement", "description": "Suppliers and purchase orders."},
    {"name": "Sales", "description": "Customers and sales orders."},
    {"name": "Invoices", "description": "Supplier and customer invoices."},
    {"name": "Tasks", "description": "Kanban tasks, sprints and timesheets."},
    {"name": "Automation", "description": "Automation playbooks and runs."},
    {"name": "Passports", "description": "Product passports (device lifecycle records)."},
    {"name": "Workforce", "description": "Teams, members and workload."},
]

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    openapi_tags=openapi_tags,
)

# CORS - avoid wildcard with credentials
cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
    logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
    cors_allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Enrich request context with a correlation_id for logging and error responses.
    Adds 'X-Correlation-ID' to every response.
    """
    corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
    token_corr = correlation_id_var.set(corr)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token_corr)

    response.headers["X-Correlation-ID"] = corr
    return response


def _build_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    """Build a standardized ErrorResponse JSONResponse."""
    err = ErrorResponse(
        status=status_code,
        error=ErrorInfo(type=error_type, message=message, details=details),
        correlation_id=getattr(request.state, "correlation_id", None),
        path=request.url.path,
        method=request.method,
        timestamp=datetime.now(tz=timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=err.model_dump(mode="json"))


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """
    Map domain failures to the error envelope; unknown ids become 404.
    """
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    logger.info("Domain error on %s %s: %s", request.method, request.url.path, exc.message)
    return _build_error_response(
        request=request,
        status_code=status_code,
        error_type=exc.code,
        message=exc.message,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Global handler for HTTPException to produce a standardized error envelope.
    """
    detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
    return _build_error_response(
        request=request,
        status_code=exc.status_code,
        error_type="http_error",
        message=str(detail),
        details=None if isinstance(exc.detail, str) else exc.detail,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Global handler for request validation errors with a standard structure.
    """
    return _build_error_response(
        request=request,
        status_code=422,
        error_type="validation_error",
        message="Request validation failed",
        details=exc.errors(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler to avoid leaking stack traces and to return a structured error.
    """
    logger.exception("Unhandled error processing request")
    return _build_error_response(
        request=request,
        status_code=500,
        error_type="internal_error",
        message="An unexpected error occurred",
        details=None,
    )


# Build API v1 router and include sub-routers
api_v1 = APIRouter(prefix="/api/v1")


# PUBLIC_INTERFACE
@api_v1.get(
    "/health",
    response_model=MessageResponse,
    summary="Health Check",
    tags=["Health"],
)
def health_check() -> MessageResponse:
    """
    Basic liveness health check endpoint.

    Returns:
        MessageResponse: Simple confirmation that the service is running.
    """
    return MessageResponse(message="Healthy")


api_v1.include_router(inventory_router)
api_v1.include_router(production_router)
api_v1.include_router(quality_router)
api_v1.include_router(maintenance_router)
api_v1.include_router(procurement_router)
api_v1.include_router(sales_router)
api_v1.include_router(invoices_router)
api_v1.include_router(tasks_router)
api_v1.include_router(automation_router)
api_v1.include_router(passports_router)
api_v1.include_router(workforce_router)
api_v1.include_router(system_router)

app.include_router(api_v1)
