"""
===============================================================================
TARJETA CRC — freshora/api/exception_handlers.py (Excepciones -> problem+json)
===============================================================================

Responsabilidades:
  - Mapear FreshoraError / DatabaseError a 500 / 503 con un error_id
    correlacionable en logs.
  - Cualquier excepción no tipada: log con stacktrace + 500 genérico (el
    mensaje original nunca llega al cliente).
  - Registrar todos los handlers en la app.

Colaboradores:
  - crosscutting.error_responses: problem_response + handlers HTTP
  - crosscutting.exceptions: FreshoraError y derivadas
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem_response,
    request_validation_handler,
)
from ..crosscutting.exceptions import DatabaseError, FreshoraError
from ..crosscutting.logger import logger

GENERIC_SERVER_ERROR = "Error del servidor"
DATA_UNAVAILABLE = "Servicio de datos no disponible."


def _service_error(
    request: Request, exc: FreshoraError, code: ErrorCode, detail: str
) -> JSONResponse:
    # El texto del driver / excepción queda en el log, no en la respuesta.
    logger.error(
        "Error de servicio",
        extra={
            "code": code.value,
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "error": exc.message,
        },
    )
    return problem_response(
        request, code, detail, errors=[{"error_id": exc.error_id}]
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return _service_error(request, exc, ErrorCode.DATABASE_ERROR, DATA_UNAVAILABLE)


async def freshora_error_handler(request: Request, exc: FreshoraError) -> JSONResponse:
    return _service_error(request, exc, ErrorCode.INTERNAL_ERROR, GENERIC_SERVER_ERROR)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Excepción no controlada",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"exception_type": type(exc).__name__},
    )
    return problem_response(request, ErrorCode.INTERNAL_ERROR, GENERIC_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    # Starlette resuelve por MRO: DatabaseError gana sobre FreshoraError.
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(FreshoraError, freshora_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers", "GENERIC_SERVER_ERROR"]
