# storefront/schemas/cart.py
from sqlmodel import SQLModel, Field


class CartLineRead(SQLModel):
    """
    Read model for a single cart line, including line_total.
    """

    id: str
    title: str
    price: float
    img: str
    qty: int
    line_total: float


class CartSummary(SQLModel):
    """
    Full cart view for the cart page.

    total_price keeps full precision; display_total is the 2-decimal
    rendering shown next to "Total".
    """

    items: list[CartLineRead] = Field(default_factory=list)
    total_quantity: int = 0
    total_price: float = 0.0

    @property
    def display_total(self) -> str:
        return f"{self.total_price:.2f}"

    @property
    def is_empty(self) -> bool:
        return not self.items
