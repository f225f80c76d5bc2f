# storefront/models/favorite.py
from storefront.models.product import ProductSnapshot


class FavoriteItem(ProductSnapshot):
    """
    Saved product. Presence is boolean: at most one entry per id, no quantity.
    """
