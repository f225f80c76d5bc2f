# storefront/models/user.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRecord(BaseModel):
    """
    Registered account.

    Identity:
      - id: creation timestamp in epoch milliseconds, strictly increasing
        within a process
      - email: stored lower-cased; unique across all records

    Records are append-only and never edited, hence frozen. The digest is
    persisted under the `passwordDigest` key.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(gt=0)
    name: str
    email: str
    password_digest: str = Field(alias="passwordDigest", pattern=r"^[0-9a-f]{64}$")
    created: str = Field(description="ISO-8601 creation timestamp")

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

    @field_validator("created")
    @classmethod
    def check_timestamp(cls, v: str) -> str:
        # fromisoformat() only accepts a trailing "Z" from 3.11 on
        candidate = v[:-1] + "+00:00" if v.endswith("Z") else v
        try:
            datetime.fromisoformat(candidate)
        except ValueError:
            raise ValueError("created must be an ISO-8601 timestamp")
        return v

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)
