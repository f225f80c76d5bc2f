# storefront/core/exceptions.py
"""
Error taxonomy for the storefront core.

Expected outcomes (recoverable, shown to the end user as a message):
  - ValidationError: missing field, password confirmation mismatch, malformed record
  - ConflictError:   email already registered
  - NotFoundError:   no account for email
  - AuthError:       password digest mismatch

Fatal to the operation in progress (never caught by the core):
  - StorageError:    storage medium unavailable, write rejected
"""


class StorefrontError(Exception):
    """Base error. `code` is a short machine-readable kind."""

    code = "error"

    def __init__(self, message: str | None = None):
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


class ValidationError(StorefrontError, ValueError):
    """Invalid input"""

    code = "validation"


class ConflictError(StorefrontError):
    """Email already registered"""

    code = "exists"


class NotFoundError(StorefrontError):
    """No account with that email"""

    code = "no-account"


class AuthError(StorefrontError):
    """Incorrect password"""

    code = "bad-password"


class StorageError(StorefrontError):
    """Storage unavailable"""

    code = "storage"
