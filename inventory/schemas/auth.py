from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    """Schema for the login payload."""
    email: str = Field(..., min_length=1, description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, value: str) -> str:
        """Reject malformed addresses but keep the submitted text as is."""
        try:
            validate_email(value.strip(), check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        # Credentials are matched against the raw value, not the normalized one
        return value


class AuthPrincipal(BaseModel):
    """Identity carried by an issued token and attached to authenticated requests."""
    email: str
    role: str


class LoginResponse(BaseModel):
    """Schema for a successful login."""
    token: str
    user: AuthPrincipal
