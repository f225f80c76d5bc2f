# storefront/models/session.py
from pydantic import BaseModel, ConfigDict

from storefront.models.user import UserRecord


class SessionRecord(BaseModel):
    """
    The signed-in user as persisted under the session key.

    A redacted projection of UserRecord: it never carries the password digest.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user: UserRecord) -> "SessionRecord":
        return cls(id=user.id, name=user.name, email=user.email)

    @property
    def display_name(self) -> str:
        """Name shown in the nav menu; falls back to the email."""
        return self.name or self.email
