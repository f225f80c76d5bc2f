# storefront/repositories/cart_repo.py
from storefront.models.cart import CartLineItem
from storefront.models.product import normalize_product_id
from storefront.repositories.collection_repo import CollectionRepository


class CartRepository(CollectionRepository[CartLineItem]):
    """Cart line items stored under the cart key, identity = product id."""

    model = CartLineItem

    def normalize_key(self, ident):
        return normalize_product_id(ident)
