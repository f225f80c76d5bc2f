# storefront/schemas/auth.py
from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel

from storefront.models.session import SessionRecord


class RegisterRequest(SQLModel):
    """
    Registration payload as the credential store accepts it.

    Validation rules:
      - email is stripped and lower-cased; it cannot be blank
      - name is stripped; password cannot be empty

    Email *format* is a form concern (see SignUpEmail), so addresses on
    local or special-use domains register fine here.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("email cannot be empty")
        return v

    @field_validator("password")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("password cannot be empty")
        return v


class SignUpEmail(SQLModel):
    """
    Email format check run by the sign-up form before calling the backend.
    """

    email: EmailStr


class SignUpForm(SQLModel):
    """
    Raw sign-up form values, exactly as typed (missing fields are "").
    """

    name: str = ""
    email: str = ""
    password: str = ""
    confirm: str = ""


class LoginForm(SQLModel):
    """
    Raw sign-in form values.
    """

    email: str = ""
    password: str = ""


class AuthOutcome(SQLModel):
    """
    Result of a sign-up / sign-in attempt as rendered by the UI.

    On failure, `error` is the error code (exists, no-account,
    bad-password, validation) and `message` the toast text.
    """

    ok: bool
    user: SessionRecord | None = None
    error: str | None = None
    message: str | None = None
