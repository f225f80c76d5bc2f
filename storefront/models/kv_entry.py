# storefront/models/kv_entry.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class KVEntry(SQLModel, table=True):
    """
    One durable key-value pair.

    The value column holds the JSON text exactly as serialized by the
    store; parsing happens on read so a corrupt row never breaks the table.
    """

    __tablename__ = "kv_entries"

    key: str = Field(
        primary_key=True,
        max_length=128,
        description="Storage key, e.g. 'ecom_cart'",
    )

    value: str = Field(description="JSON-encoded value")

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last write timestamp (UTC)",
    )
