"""
Exception hierarchy for the inventory API.

Every exception carries the HTTP status and the client-facing message it is
rendered with; the handlers in ``inventory.api.errors`` turn them into
``{"error": ...}`` bodies.
"""

from typing import Optional


class InventoryError(Exception):
    """Base exception for all errors surfaced to API clients."""

    status_code: int = 500
    message: str = "Erro interno do servidor"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to a dictionary for API responses."""
        return {"error": self.message}


class ValidationError(InventoryError):
    """Input failed validation. Carries every violated rule, not just the first."""

    status_code = 400
    message = "Dados de entrada inválidos"

    def __init__(self, details: list[str], message: Optional[str] = None):
        super().__init__(message)
        self.details = list(details)

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.details}


class AuthenticationError(InventoryError):
    """Login credentials did not match."""

    status_code = 401
    message = "Credenciais inválidas"


class TokenError(InventoryError):
    """Base for the three distinct bearer-token failures."""

    status_code = 401


class MissingTokenError(TokenError):
    message = "Token de acesso requerido"


class InvalidTokenError(TokenError):
    message = "Token inválido"


class ExpiredTokenError(TokenError):
    message = "Token expirado"


class NotFoundError(InventoryError):
    """Requested product does not exist."""

    status_code = 404
    message = "Produto não encontrado"


class RouteNotFoundError(InventoryError):
    status_code = 404
    message = "Rota não encontrada"


class PayloadTooLargeError(InventoryError):
    status_code = 413
    message = "Corpo da requisição muito grande"


class InternalError(InventoryError):
    """Unexpected failure. The message never includes internal detail."""

    status_code = 500
    message = "Erro interno do servidor"
