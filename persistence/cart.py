from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .disk_store import DEFAULT_CORRUPT_POLICY, CorruptPolicy
from .paths import store_path
from .record_store import FileBackedRecordStore, RecordId, id_key, same_id

CART_STORE_NAME = "cart"


def coerce_price(value: Any) -> float:
    """Accept numbers or numeric strings (form input); reject negatives and non-finite values."""
    if isinstance(value, bool):
        raise ValueError(f"invalid price: {value!r}")
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid price: {value!r}") from e
    if not math.isfinite(price) or price < 0:
        raise ValueError(f"invalid price: {value!r}")
    return price


class CartLine(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId
    quantity: int = Field(default=1, ge=1)


class Cart(BaseModel):
    """
    Mirrors the on-disk cart.json schema:
      { "products": [ { "id": ..., "quantity": 1 } ], "totalPrice": 0 }
    """

    products: list[CartLine] = Field(default_factory=list)
    totalPrice: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "Cart":
        ids = [id_key(line.id) for line in self.products]
        if len(ids) != len(set(ids)):
            raise ValueError("duplicate product ids in cart")
        return self

    @classmethod
    def from_disk_doc(cls, doc: Any) -> "Cart":
        if not isinstance(doc, Mapping):
            raise ValueError("cart document must be an object")
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def line_for(self, product_id: RecordId) -> CartLine | None:
        return next((line for line in self.products if same_id(line.id, product_id)), None)

    def recompute_total(self, prices: Mapping[RecordId, float]) -> float:
        """Sum unit price × quantity over the current lines using a price table."""
        return sum(float(prices[line.id]) * line.quantity for line in self.products)


class CartStore(FileBackedRecordStore[Cart]):
    @classmethod
    def under(cls, root: Path, *, corrupt_policy: CorruptPolicy = DEFAULT_CORRUPT_POLICY) -> "CartStore":
        return cls(store_path(root, CART_STORE_NAME), corrupt_policy=corrupt_policy)

    def empty(self) -> Cart:
        return Cart()

    def parse(self, doc: Any) -> Cart:
        return Cart.from_disk_doc(doc)

    def dump(self, record_set: Cart) -> dict[str, Any]:
        return record_set.to_disk_doc()

    def get_cart(self) -> Cart:
        return self.query_all()

    def add_product(self, product_id: RecordId, product_price: Any) -> Cart:
        """Add one unit: bump the existing line's quantity or append a new line."""
        price = coerce_price(product_price)
        with self.mutate() as m:
            cart = m.record_set
            line = cart.line_for(product_id)
            if line is None:
                cart.products.append(CartLine(id=product_id, quantity=1))
            else:
                line.quantity += 1
            cart.totalPrice = cart.totalPrice + price
        return m.record_set

    def delete_product(self, product_id: RecordId, product_price: Any) -> bool:
        """
        Remove the whole line for product_id and take price × quantity off the total.

        Returns False without writing when there is no such line.
        """
        price = coerce_price(product_price)
        with self.mutate() as m:
            cart = m.record_set
            line = cart.line_for(product_id)
            if line is None:
                m.abort()
                return False
            cart.products = [p for p in cart.products if p is not line]
            if not cart.products:
                cart.totalPrice = 0.0
            else:
                cart.totalPrice = max(cart.totalPrice - price * line.quantity, 0.0)
        return True
