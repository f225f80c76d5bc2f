# storefront/services/cart_service.py
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError as PydanticValidationError

from storefront.core.exceptions import ValidationError
from storefront.models.cart import CartLineItem
from storefront.repositories.cart_repo import CartRepository
from storefront.schemas.cart import CartLineRead, CartSummary

logger = logging.getLogger(__name__)


def _check_qty(qty: Any) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise ValidationError(f"Quantity must be an integer, got {qty!r}")
    return qty


class CartService:
    """
    Business logic for the shopping cart.

    Responsibilities:
      - keep one line per product id (adding again merges quantities)
      - never store a line with qty < 1 (dropping to 0 removes it)
      - compute line totals, cart total and the badge item count

    Every mutation reloads the cart from the store and persists the whole
    collection before returning.
    """

    def __init__(self, repo: CartRepository):
        self.repo = repo

    # ---- internal helpers ----

    def _to_line(self, item: Any, qty: int | None) -> CartLineItem:
        if isinstance(item, BaseModel):
            data = item.model_dump()
        elif isinstance(item, Mapping):
            data = dict(item)
        else:
            raise ValidationError(f"Cannot add {type(item).__name__} to cart")

        if qty is None:
            qty = data.get("qty") or 1
        data["qty"] = _check_qty(qty)
        if data["qty"] < 1:
            raise ValidationError("Quantity must be at least 1")

        try:
            return CartLineItem.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid cart item: {e.errors()[0]['msg']}") from e

    @staticmethod
    def _count(lines: list[CartLineItem]) -> int:
        return sum(line.qty for line in lines)

    def _save(self, lines: list[CartLineItem]) -> int:
        self.repo.save(lines)
        return self._count(lines)

    # ---- public operations ----

    def add(self, item: Any, qty: int | None = None) -> int:
        """
        Add a product to the cart.

        If a line with the same id exists its qty is incremented, otherwise a
        new line is inserted. `qty` defaults to the payload's own qty, or 1.

        Returns:
            The cart item count after the change (sum of quantities).
        """
        line = self._to_line(item, qty)
        lines = self.repo.list_all()

        for i, existing in enumerate(lines):
            if existing.id == line.id:
                lines[i] = existing.model_copy(update={"qty": existing.qty + line.qty})
                break
        else:
            lines.append(line)

        logger.debug("cart add id=%s qty=%d", line.id, line.qty)
        return self._save(lines)

    def set_quantity(self, product_id: str, qty: int) -> int:
        """
        Overwrite the quantity of a line.

        qty <= 0 removes the line. Unknown ids are a no-op.
        """
        qty = _check_qty(qty)
        product_id = self.repo.normalize_key(product_id)
        lines = self.repo.list_all()
        idx = next((i for i, line in enumerate(lines) if line.id == product_id), None)
        if idx is None:
            return self._count(lines)

        if qty <= 0:
            del lines[idx]
        else:
            lines[idx] = lines[idx].model_copy(update={"qty": qty})
        return self._save(lines)

    def increment(self, product_id: str) -> int:
        line = self.repo.get(product_id)
        if line is None:
            return self.item_count()
        return self.set_quantity(product_id, line.qty + 1)

    def decrement(self, product_id: str) -> int:
        """Step down by one; a line at qty 1 is removed."""
        line = self.repo.get(product_id)
        if line is None:
            return self.item_count()
        return self.set_quantity(product_id, line.qty - 1)

    def remove(self, product_id: str) -> int:
        """Remove a line if present; no-op otherwise."""
        product_id = self.repo.normalize_key(product_id)
        lines = self.repo.list_all()
        kept = [line for line in lines if line.id != product_id]
        if len(kept) == len(lines):
            return self._count(lines)
        return self._save(kept)

    def clear(self) -> None:
        self.repo.clear()

    # ---- reads ----

    def items(self) -> list[CartLineItem]:
        return self.repo.list_all()

    def item_count(self) -> int:
        """Sum of quantities, shown on the cart badge."""
        return self._count(self.repo.list_all())

    def total(self) -> float:
        """Sum of qty * price over all lines, full precision."""
        return sum((line.line_total for line in self.repo.list_all()), 0.0)

    def summary(self) -> CartSummary:
        """
        Return full cart summary:
          - list of CartLineRead (with line_total)
          - total_quantity
          - total_price
        """
        lines = self.repo.list_all()
        return CartSummary(
            items=[
                CartLineRead(
                    id=line.id,
                    title=line.title,
                    price=line.price,
                    img=line.img,
                    qty=line.qty,
                    line_total=line.line_total,
                )
                for line in lines
            ],
            total_quantity=self._count(lines),
            total_price=sum((line.line_total for line in lines), 0.0),
        )
