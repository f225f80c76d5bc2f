# storefront/schemas/favorite.py
from sqlmodel import SQLModel


class FavoriteToggleResult(SQLModel):
    """
    Outcome of a heart-button press.

    added=False means the item was removed. count feeds the favorites badge.
    """

    id: str
    added: bool
    count: int
