# storefront/repositories/favorites_repo.py
from storefront.models.favorite import FavoriteItem
from storefront.models.product import normalize_product_id
from storefront.repositories.collection_repo import CollectionRepository


class FavoritesRepository(CollectionRepository[FavoriteItem]):
    """Saved products stored under the favorites key, identity = product id."""

    model = FavoriteItem

    def normalize_key(self, ident):
        return normalize_product_id(ident)

    def contains(self, product_id: str) -> bool:
        return self.get(product_id) is not None
