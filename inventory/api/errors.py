"""
Exception handlers that shape every error response as ``{"error": ...}``
(plus ``"details"`` for validation failures).
"""

import logging
from typing import Any, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory.exceptions import (
    InternalError,
    InventoryError,
    RouteNotFoundError,
    TokenError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INVALID_BODY = "Corpo da requisição inválido"

# Messages per (location, field), keyed by the kind of rule that failed.
# "*" covers any rule without its own entry.
FIELD_MESSAGES: dict[tuple[str, str], dict[str, str]] = {
    ("body", "name"): {
        "required": "Nome é obrigatório",
        "max": "Nome deve ter no máximo 255 caracteres",
        "*": "Nome deve ser um texto",
    },
    ("body", "description"): {
        "*": "Descrição deve ser um texto",
    },
    ("body", "price"): {
        "required": "Preço é obrigatório",
        "min": "Preço deve ser maior ou igual a zero",
        "max": "Preço deve ser no máximo 99999999.99",
        "*": "Preço deve ser um número",
    },
    ("body", "category"): {
        "required": "Categoria é obrigatória",
        "max": "Categoria deve ter no máximo 255 caracteres",
        "*": "Categoria deve ser um texto",
    },
    ("body", "stock"): {
        "min": "Estoque deve ser maior ou igual a zero",
        "*": "Estoque deve ser um número inteiro",
    },
    ("body", "active"): {
        "*": "Ativo deve ser verdadeiro ou falso",
    },
    ("body", "email"): {
        "required": "Email é obrigatório",
        "*": "Email inválido",
    },
    ("body", "password"): {
        "required": "Senha é obrigatória",
        "*": "Senha deve ser um texto",
    },
    ("query", "page"): {
        "*": "Página deve ser um número inteiro maior ou igual a 1",
    },
    ("query", "limit"): {
        "*": "Limite deve ser um número inteiro maior ou igual a 1",
    },
    ("query", "active"): {
        "*": "Filtro active deve ser 'true', 'false' ou 'all'",
    },
    ("path", "product_id"): {
        "*": "ID deve ser um número inteiro",
    },
}

_RULE_BY_TYPE = {
    "missing": "required",
    "string_too_short": "required",
    "string_too_long": "max",
    "greater_than": "min",
    "greater_than_equal": "min",
    "less_than": "max",
    "less_than_equal": "max",
}


def _rule_for(error: dict[str, Any]) -> str:
    rule = _RULE_BY_TYPE.get(error["type"], "*")
    # An explicit null for a required field reads as "missing"
    if rule == "*" and error.get("input", ...) is None:
        return "required"
    return rule


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[str]:
    """
    Turn pydantic/FastAPI error dicts into one human-readable message per
    violated rule, preserving order and dropping duplicates.
    """
    details: list[str] = []
    for error in errors:
        loc = tuple(error.get("loc", ()))

        if len(loc) < 2 or error.get("type") == "json_invalid":
            message = INVALID_BODY
        else:
            messages = FIELD_MESSAGES.get((str(loc[0]), str(loc[1])))
            if messages is None:
                field = ".".join(str(part) for part in loc[1:])
                message = f"{field}: {error.get('msg', 'valor inválido')}"
            else:
                rule = _rule_for(error)
                message = messages.get(rule) or messages["*"]

        if message not in details:
            details.append(message)
    return details


def _error_response(exc: InventoryError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, TokenError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = format_validation_errors(exc.errors())
    logger.info(f"Validation failed for {request.method} {request.url.path}: {details}")
    return _error_response(ValidationError(details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _error_response(RouteNotFoundError())
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that give every error the same JSON shape."""
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
