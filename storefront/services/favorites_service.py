# storefront/services/favorites_service.py
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError as PydanticValidationError

from storefront.core.exceptions import ValidationError
from storefront.models.favorite import FavoriteItem
from storefront.repositories.favorites_repo import FavoritesRepository
from storefront.schemas.favorite import FavoriteToggleResult
from storefront.services.cart_service import CartService

logger = logging.getLogger(__name__)


class FavoritesService:
    """
    Business logic for the favorites list.

    toggle() is the only way in or out for a single item, so the heart
    button never needs to know the current state before it is pressed.
    """

    def __init__(self, repo: FavoritesRepository):
        self.repo = repo

    def _to_favorite(self, item: Any) -> FavoriteItem:
        if isinstance(item, BaseModel):
            data = item.model_dump()
        elif isinstance(item, Mapping):
            data = dict(item)
        else:
            raise ValidationError(f"Cannot favorite {type(item).__name__}")
        try:
            return FavoriteItem.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid favorite: {e.errors()[0]['msg']}") from e

    def toggle(self, item: Any) -> FavoriteToggleResult:
        """
        Remove the item if it is saved, otherwise save the full payload.

        A payload carrying only the id is enough to remove an entry.
        """
        fav = self._to_favorite(item)
        favs = self.repo.list_all()
        kept = [f for f in favs if f.id != fav.id]

        added = len(kept) == len(favs)
        if added:
            kept.append(fav)
        self.repo.save(kept)

        logger.debug("favorite %s id=%s", "added" if added else "removed", fav.id)
        return FavoriteToggleResult(id=fav.id, added=added, count=len(kept))

    def is_favorite(self, product_id: str) -> bool:
        return self.repo.contains(product_id)

    def clear(self) -> None:
        self.repo.clear()

    def count(self) -> int:
        """Number of saved items, shown on the favorites badge."""
        return self.repo.count()

    def items(self) -> list[FavoriteItem]:
        return self.repo.list_all()

    def add_to_cart(self, product_id: str, cart: CartService) -> int | None:
        """
        Copy a saved item into the cart with qty 1. The favorite stays saved.

        Returns:
            The cart item count, or None if the id is not a favorite.
        """
        fav = self.repo.get(product_id)
        if fav is None:
            return None
        return cart.add(fav, qty=1)
