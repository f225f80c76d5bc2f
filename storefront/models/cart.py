# storefront/models/cart.py
from pydantic import Field

from storefront.models.product import ProductSnapshot


class CartLineItem(ProductSnapshot):
    """
    Shopping cart entry.

    The cart never holds 2 lines for the same id, and a stored line always
    has qty >= 1 (dropping to 0 removes the line instead).
    """

    qty: int = Field(default=1, ge=1, description="Must be >= 1")

    @property
    def line_total(self) -> float:
        return self.qty * self.price
