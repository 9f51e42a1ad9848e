from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inventory.config import get_settings
from inventory.exceptions import MissingTokenError
from inventory.schemas.auth import AuthPrincipal
from inventory.services.auth_service import AuthService, CredentialVerifier, default_verifier

# Bearer token extractor; returns None instead of raising so the
# missing-token case gets its own error body
bearer_scheme = HTTPBearer(auto_error=False)


def get_credential_verifier() -> CredentialVerifier:
    """Dependency providing the credential verifier used by login."""
    return default_verifier()


def get_auth_service(
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> AuthService:
    return AuthService(verifier=verifier, settings=get_settings())


def _token_from_header(request: Request) -> Optional[str]:
    """Second segment of the Authorization header, whatever the scheme."""
    _, _, token = request.headers.get("authorization", "").strip().partition(" ")
    return token.strip() or None


def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthPrincipal:
    """
    Dependency that requires a valid bearer token.

    A header with another scheme still has its token checked, so
    ``Basic xyz`` is an invalid token rather than a missing one.

    Usage:
        @router.get("/protected")
        def protected_route(principal: AuthPrincipal = Depends(get_current_principal)):
            return {"email": principal.email}
    """
    token = credentials.credentials.strip() if credentials else _token_from_header(request)
    if not token:
        raise MissingTokenError()

    return auth_service.decode_token(token)


RequireAuth = Depends(get_current_principal)
