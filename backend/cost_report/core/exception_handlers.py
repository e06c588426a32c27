"""
Exception Handlers
Global handlers turning application exceptions into HTTP responses
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from cost_report.core.exceptions import (
    ConfigurationError,
    CostReportError,
    ExternalServiceError,
    LLMServiceError,
    ResourceExistsError,
    ResourceNotFoundError,
    ValidationError,
)

CONFIGURATION_ERROR_MESSAGE = "Server configuration error"


def _format_request_error(exc: RequestValidationError) -> tuple[str, str]:
    errors = exc.errors()
    if not errors:
        return "body", "Invalid request"
    first = errors[0]
    # Drop the "body" prefix FastAPI puts in front of body fields
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "body"
    message = str(first.get("msg", "Invalid value")).removeprefix("Value error, ")
    return field, message


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers"""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        field, message = _format_request_error(exc)
        return JSONResponse(
            status_code=400,
            content={"error": f"Validation error for '{field}': {message}", "field": field},
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "field": exc.field},
        )

    @app.exception_handler(ResourceNotFoundError)
    async def resource_not_found_handler(request: Request, exc: ResourceNotFoundError):
        return JSONResponse(
            status_code=404,
            content={"error": exc.message},
        )

    @app.exception_handler(ResourceExistsError)
    async def resource_exists_handler(request: Request, exc: ResourceExistsError):
        return JSONResponse(
            status_code=409,
            content={"error": exc.message},
        )

    @app.exception_handler(LLMServiceError)
    async def llm_error_handler(request: Request, exc: LLMServiceError):
        logger.error(
            f"LLM Service Error: {exc.message}",
            provider=exc.provider,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=502,
            content={
                "error": exc.message,
                "service": "llm",
                "provider": exc.provider,
            },
        )

    @app.exception_handler(ExternalServiceError)
    async def external_service_handler(request: Request, exc: ExternalServiceError):
        logger.error(f"External Service Error: {exc.message}", service=exc.service)
        return JSONResponse(
            status_code=502,
            content={"error": exc.message, "service": exc.service},
        )

    @app.exception_handler(ConfigurationError)
    async def config_error_handler(request: Request, exc: ConfigurationError):
        # The real cause only goes to the log
        logger.error(f"Configuration Error: {exc.message}")
        return JSONResponse(
            status_code=500,
            content={"error": CONFIGURATION_ERROR_MESSAGE},
        )

    @app.exception_handler(CostReportError)
    async def cost_report_error_handler(request: Request, exc: CostReportError):
        """Fallback for any CostReportError"""
        logger.error(f"CostReport Error: {exc.message}")
        return JSONResponse(
            status_code=500,
            content={"error": exc.message},
        )
