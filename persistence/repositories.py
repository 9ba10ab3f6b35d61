from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field

from .cart import Cart, CartStore
from .catalog import Product, ProductCatalogStore
from .disk_store import DEFAULT_CORRUPT_POLICY, CorruptPolicy
from .record_store import RecordId

logger = logging.getLogger(__name__)


class CartItemView(BaseModel):
    product: Product
    quantity: int


class CartView(BaseModel):
    products: list[CartItemView] = Field(default_factory=list)
    totalPrice: float = 0.0


class AsyncShopRepository(Protocol):
    """
    Domain-level shop persistence interface used by the HTTP layer.
    """

    async def list_products(self) -> list[Product]: ...
    async def get_product(self, product_id: RecordId) -> Product | None: ...
    async def save_product(self, product: Product) -> Product: ...
    async def delete_product(self, product_id: RecordId) -> Product | None: ...

    async def get_cart(self) -> CartView: ...
    async def add_to_cart(self, product_id: RecordId) -> Cart: ...
    async def remove_from_cart(self, product_id: RecordId) -> bool: ...


class AsyncDiskShopRepository(AsyncShopRepository):
    """
    Disk-backed shop repository: products.json for the catalog, cart.json for the cart.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, root: Path, *, corrupt_policy: CorruptPolicy = DEFAULT_CORRUPT_POLICY) -> None:
        self._catalog = ProductCatalogStore.under(root, corrupt_policy=corrupt_policy)
        self._cart = CartStore.under(root, corrupt_policy=corrupt_policy)

    @property
    def catalog(self) -> ProductCatalogStore:
        return self._catalog

    @property
    def cart(self) -> CartStore:
        return self._cart

    async def list_products(self) -> list[Product]:
        catalog = await asyncio.to_thread(self._catalog.fetch_all)
        return list(catalog.products)

    async def get_product(self, product_id: RecordId) -> Product | None:
        return await asyncio.to_thread(self._catalog.find_by_id, product_id)

    async def save_product(self, product: Product) -> Product:
        stored = await asyncio.to_thread(self._catalog.save_product, product)
        logger.info("PRODUCT SAVED: id=%s title=%r", stored.id, stored.title)
        return stored

    async def delete_product(self, product_id: RecordId) -> Product | None:
        removed = await asyncio.to_thread(self._catalog.delete_product, product_id)
        if removed is None:
            return None
        # A deleted product must not stay in the cart.
        await asyncio.to_thread(self._cart.delete_product, removed.id, removed.price)
        logger.info("PRODUCT DELETED: id=%s", product_id)
        return removed

    async def get_cart(self) -> CartView:
        cart = await asyncio.to_thread(self._cart.get_cart)
        catalog = await asyncio.to_thread(self._catalog.fetch_all)
        items: list[CartItemView] = []
        for line in cart.products:
            product = catalog.find(line.id)
            if product is None:
                logger.debug("CART VIEW: skipping line for unknown product %s", line.id)
                continue
            items.append(CartItemView(product=product, quantity=line.quantity))
        return CartView(products=items, totalPrice=cart.totalPrice)

    async def add_to_cart(self, product_id: RecordId) -> Cart:
        product = await self.get_product(product_id)
        if product is None:
            raise LookupError(f"unknown product: {product_id}")
        cart = await asyncio.to_thread(self._cart.add_product, product.id, product.price)
        logger.info("CART ADD: id=%s total=%.2f", product_id, cart.totalPrice)
        return cart

    async def remove_from_cart(self, product_id: RecordId) -> bool:
        product = await self.get_product(product_id)
        if product is None:
            return False
        removed = await asyncio.to_thread(self._cart.delete_product, product.id, product.price)
        if removed:
            logger.info("CART REMOVE: id=%s", product_id)
        return removed
