"""
===============================================================================
MÓDULO: Errores HTTP como Problem Details (RFC 7807)
===============================================================================

Contrato con el cliente web
---------------------------
Todo error sale como `application/problem+json` con:
  - code: identificador estable (VALIDATION_ERROR, FORBIDDEN, ...)
  - detail / message: el mismo texto legible (el cliente muestra `message`)
  - errors: detalles opcionales (campos inválidos, request_id, error_id)

401 (sin identidad o token inválido) y 403 (identidad válida, rol incorrecto)
usan códigos distintos para que el cliente decida entre ir a /login o mostrar
"acceso denegado".

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErrorCode + AppHTTPException + handlers

Responsabilidades:
  - Fijar el status HTTP de cada ErrorCode en un único lugar
  - Construir el payload (ErrorDetail) con request_id
  - Factories usadas por rutas y por la cadena de autorización

Colaboradores:
  - crosscutting/middleware.py (request.state.request_id)
  - api/exception_handlers.py (errores internos -> problem+json)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INVALID_CREDENTIALS: 401,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 503,
}


class ErrorDetail(BaseModel):
    """Payload problem+json. `message` duplica `detail` para el cliente web."""

    type: str = "about:blank"
    title: str
    status: int
    code: ErrorCode
    detail: str
    message: str
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode estable y detalles opcionales."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors

    @classmethod
    def of(
        cls, code: ErrorCode, detail: str, errors: list[dict[str, Any]] | None = None
    ) -> "AppHTTPException":
        return cls(STATUS_BY_CODE[code], code, detail, errors)


def _openapi_entry(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (problem+json)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: _openapi_entry("No autenticado"),
    403: _openapi_entry("Rol sin permiso"),
    404: _openapi_entry("Recurso inexistente"),
    422: _openapi_entry("Datos inválidos"),
    "default": _openapi_entry("Error"),
}


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException.of(
        ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado"
    )


def invalid_credentials() -> AppHTTPException:
    # Un único texto para email inexistente y password incorrecto.
    return AppHTTPException.of(ErrorCode.INVALID_CREDENTIALS, "Credenciales inválidas.")


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return AppHTTPException.of(ErrorCode.FORBIDDEN, detail)


# ---------------------------------------------------------------------------
# Serialización + handlers
# ---------------------------------------------------------------------------
def problem_response(
    request: Request,
    code: ErrorCode,
    detail: str,
    *,
    status_code: int | None = None,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    status = status_code or STATUS_BY_CODE[code]
    extra = list(errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        extra.append({"request_id": request_id})

    body = ErrorDetail(
        type=f"about:blank/{code.value.lower()}",
        title=code.value.replace("_", " ").capitalize(),
        status=status,
        code=code,
        detail=detail,
        message=detail,
        instance=request.url.path,
        errors=extra or None,
    )
    return JSONResponse(
        body.model_dump(mode="json", exclude_none=True),
        status_code=status,
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return problem_response(
        request,
        exc.code,
        str(exc.detail),
        status_code=exc.status_code,
        errors=exc.errors,
        headers=exc.headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/query/path inválidos -> VALIDATION_ERROR con la lista de campos."""
    fields = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return problem_response(
        request, ErrorCode.VALIDATION_ERROR, "Datos de entrada inválidos.", errors=fields
    )
