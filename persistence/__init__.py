from __future__ import annotations

from .cart import Cart, CartLine, CartStore
from .catalog import Product, ProductCatalog, ProductCatalogStore
from .disk_store import CorruptPolicy, DiskJsonDocumentStore
from .exceptions import CorruptStoreError, RecordStoreError, StoreReadError, StoreWriteError
from .record_store import FileBackedRecordStore
from .repositories import AsyncDiskShopRepository, AsyncShopRepository, CartItemView, CartView

__all__ = [
    "Cart",
    "CartLine",
    "CartStore",
    "Product",
    "ProductCatalog",
    "ProductCatalogStore",
    "CorruptPolicy",
    "DiskJsonDocumentStore",
    "FileBackedRecordStore",
    "RecordStoreError",
    "StoreReadError",
    "CorruptStoreError",
    "StoreWriteError",
    "AsyncShopRepository",
    "AsyncDiskShopRepository",
    "CartItemView",
    "CartView",
]
