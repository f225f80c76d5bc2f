# storefront/models/product.py
from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_product_id(v):
    """Product ids are text: numbers become strings, whitespace is stripped.

    Used both when a record is built and when a caller looks one up, so
    `5`, `"5"` and `" 5 "` all name the same product. Other types pass
    through untouched.
    """
    if isinstance(v, int) and not isinstance(v, bool):
        v = str(v)
    if isinstance(v, str):
        v = v.strip()
    return v


class ProductSnapshot(BaseModel):
    """
    Product fields copied from a product card when it is saved.

    Shared by cart line items and favorites. Validation rules:
      - id is required and cannot be blank (numbers are accepted as text)
      - title falls back to "Item" when blank
      - price must be >= 0
      - img is optional (empty string when missing)
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = "Item"
    price: float = Field(default=0.0, ge=0)
    img: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        v = normalize_product_id(v)
        if v == "":
            raise ValueError("id cannot be empty")
        return v

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v):
        if v is None:
            return "Item"
        if isinstance(v, str):
            return v.strip() or "Item"
        return v

    @field_validator("img", mode="before")
    @classmethod
    def default_img(cls, v):
        return "" if v is None else v
