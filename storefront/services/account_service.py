# storefront/services/account_service.py
import logging

from pydantic import ValidationError as PydanticValidationError

from storefront.core.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    StorefrontError,
    ValidationError,
)
from storefront.models.user import UserRecord
from storefront.schemas.auth import AuthOutcome, LoginForm, SignUpEmail, SignUpForm
from storefront.services.credential_service import CredentialService
from storefront.services.remote_service import MockRemoteService
from storefront.services.session_service import SessionService

logger = logging.getLogger(__name__)


class AccountService:
    """
    Sign-up / sign-in / sign-out flows behind the auth forms.

    Responsibilities:
      - check the form before calling the core (required fields, password
        confirmation)
      - route the call through the latent mock backend, or straight to the
        credential service when the mock is disabled
      - sign the user in on success
      - turn expected failures into an AuthOutcome carrying the toast text

    StorageError is not an expected outcome and propagates to the caller.
    """

    SIGNED_OUT_MESSAGE = "Signed out"

    def __init__(
        self,
        credentials: CredentialService,
        remote: MockRemoteService,
        session: SessionService,
        use_mock_api: bool = True,
    ):
        self.credentials = credentials
        self.remote = remote
        self.session = session
        self.use_mock_api = use_mock_api

    # ---- internal helpers ----

    @staticmethod
    def _failure(error: StorefrontError) -> AuthOutcome:
        return AuthOutcome(ok=False, error=error.code, message=error.message)

    async def _register(self, form: SignUpForm) -> UserRecord:
        if self.use_mock_api:
            return await self.remote.register(form.name, form.email, form.password)
        return self.credentials.register(form.name, form.email, form.password)

    async def _authenticate(self, form: LoginForm) -> UserRecord:
        if self.use_mock_api:
            return await self.remote.authenticate(form.email, form.password)
        return self.credentials.authenticate(form.email, form.password)

    # ---- public operations ----

    async def sign_up(self, form: SignUpForm) -> AuthOutcome:
        """
        Create an account and sign it in.

        Failure outcomes:
          - validation: missing field, passwords don't match, bad email
          - exists: email already registered
        """
        if not (form.name.strip() and form.email.strip() and form.password):
            return self._failure(ValidationError("Please complete all fields"))
        if form.password != form.confirm:
            return self._failure(ValidationError("Passwords don't match"))
        try:
            SignUpEmail(email=form.email.strip())
        except PydanticValidationError:
            return self._failure(ValidationError("Enter a valid email address"))

        try:
            user = await self._register(form)
        except (ConflictError, ValidationError) as e:
            logger.info("Sign-up rejected: %s", e.code)
            return self._failure(e)

        return AuthOutcome(ok=True, user=self.session.sign_in(user))

    async def sign_in(self, form: LoginForm) -> AuthOutcome:
        """
        Verify credentials and sign the user in.

        Failure outcomes:
          - validation: email or password missing
          - no-account: no account for this email
          - bad-password: password does not match
        """
        if not (form.email.strip() and form.password):
            return self._failure(ValidationError("Please enter email and password"))

        try:
            user = await self._authenticate(form)
        except (NotFoundError, AuthError) as e:
            logger.info("Sign-in rejected: %s", e.code)
            return self._failure(e)

        return AuthOutcome(ok=True, user=self.session.sign_in(user))

    def sign_out(self) -> str:
        """Clear the session and return the toast text."""
        self.session.sign_out()
        return self.SIGNED_OUT_MESSAGE
