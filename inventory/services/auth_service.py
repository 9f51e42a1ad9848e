from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol
import logging
import secrets

from jose import ExpiredSignatureError, JWTError, jwt

from inventory.config import Settings, get_settings
from inventory.exceptions import (
    AuthenticationError,
    ExpiredTokenError,
    InvalidTokenError,
)
from inventory.schemas.auth import AuthPrincipal, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

# The single account recognized by the API
ADMIN_EMAIL = "admin@b4you.dev"
ADMIN_PASSWORD = "123456"
ADMIN_ROLE = "admin"


class CredentialVerifier(Protocol):
    """Resolves an email/password pair to a principal, or None if it doesn't match."""

    def verify(self, email: str, password: str) -> Optional[AuthPrincipal]:
        ...


class StaticCredentialVerifier:
    """
    Credential verifier backed by a fixed lookup table.

    Each entry maps an email to its password and the principal it resolves to.
    """

    def __init__(self, accounts: dict[str, tuple[str, AuthPrincipal]]):
        self.accounts = accounts

    def verify(self, email: str, password: str) -> Optional[AuthPrincipal]:
        entry = self.accounts.get(email)
        if entry is None:
            return None

        expected_password, principal = entry
        if not secrets.compare_digest(password.encode(), expected_password.encode()):
            return None
        return principal


def default_verifier() -> StaticCredentialVerifier:
    """Verifier holding the built-in admin account."""
    return StaticCredentialVerifier(
        {ADMIN_EMAIL: (ADMIN_PASSWORD, AuthPrincipal(email=ADMIN_EMAIL, role=ADMIN_ROLE))}
    )


class AuthService:
    """
    Service class for issuing and verifying access tokens.

    Tokens are HS256-signed JWTs carrying the principal's email and role,
    valid for JWT_EXPIRES_MINUTES (one hour by default).
    """

    def __init__(
        self,
        verifier: Optional[CredentialVerifier] = None,
        settings: Optional[Settings] = None,
    ):
        self.verifier = verifier or default_verifier()
        self.settings = settings or get_settings()

    def login(self, credentials: LoginRequest) -> LoginResponse:
        """
        Exchange credentials for a signed token.

        Raises:
            AuthenticationError: If the credentials don't match
        """
        principal = self.verifier.verify(credentials.email, credentials.password)
        if principal is None:
            logger.warning(f"Failed login attempt for {credentials.email}")
            raise AuthenticationError()

        token = self.create_access_token(principal)
        logger.info(f"User {principal.email} logged in")
        return LoginResponse(token=token, user=principal)

    def create_access_token(
        self,
        principal: AuthPrincipal,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """Sign a token for the principal, expiring JWT_EXPIRES_MINUTES after issuance."""
        now = issued_at or datetime.now(timezone.utc)
        expires = now + timedelta(minutes=self.settings.JWT_EXPIRES_MINUTES)

        claims = {
            "email": principal.email,
            "role": principal.role,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(claims, self.settings.JWT_SECRET, algorithm=self.settings.JWT_ALGORITHM)

    def decode_token(self, token: str) -> AuthPrincipal:
        """
        Verify a token's signature and expiry and return its principal.

        Raises:
            ExpiredTokenError: If the signature is valid but the token has expired
            InvalidTokenError: If the token is malformed, tampered with, or lacks claims
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.JWT_SECRET,
                algorithms=[self.settings.JWT_ALGORITHM],
            )
        except ExpiredSignatureError:
            raise ExpiredTokenError()
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidTokenError()

        email = payload.get("email")
        role = payload.get("role")
        if not isinstance(email, str) or not isinstance(role, str):
            raise InvalidTokenError()

        return AuthPrincipal(email=email, role=role)
