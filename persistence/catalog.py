from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .disk_store import DEFAULT_CORRUPT_POLICY, CorruptPolicy
from .paths import store_path
from .record_store import FileBackedRecordStore, RecordId, id_key, same_id

CATALOG_STORE_NAME = "products"


class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId | None = None
    title: str
    price: float = Field(ge=0, allow_inf_nan=False)
    imageUrl: str = ""
    description: str = ""


class ProductCatalog(BaseModel):
    """
    On disk the catalog is a bare JSON array of product objects:
      [ { "id": "...", "title": "...", "price": 9.99, "imageUrl": "...", "description": "..." } ]
    """

    products: list[Product] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_ids_present_and_unique(self) -> "ProductCatalog":
        ids = [p.id for p in self.products]
        if any(i is None for i in ids):
            raise ValueError("stored product without id")
        if len(ids) != len({id_key(i) for i in ids}):
            raise ValueError("duplicate product ids in catalog")
        return self

    @classmethod
    def from_disk_doc(cls, doc: Any) -> "ProductCatalog":
        # Also accept { "products": [...] } for documents written by hand.
        if isinstance(doc, Mapping) and "products" in doc:
            return cls.model_validate(doc)
        if not isinstance(doc, list):
            raise ValueError("catalog document must be an array")
        return cls.model_validate({"products": doc})

    def to_disk_doc(self) -> list[dict[str, Any]]:
        return [p.model_dump(mode="json") for p in self.products]

    def find(self, product_id: RecordId) -> Product | None:
        return next((p for p in self.products if same_id(p.id, product_id)), None)


class ProductCatalogStore(FileBackedRecordStore[ProductCatalog]):
    @classmethod
    def under(cls, root: Path, *, corrupt_policy: CorruptPolicy = DEFAULT_CORRUPT_POLICY) -> "ProductCatalogStore":
        return cls(store_path(root, CATALOG_STORE_NAME), corrupt_policy=corrupt_policy)

    def empty(self) -> ProductCatalog:
        return ProductCatalog()

    def parse(self, doc: Any) -> ProductCatalog:
        return ProductCatalog.from_disk_doc(doc)

    def dump(self, record_set: ProductCatalog) -> list[dict[str, Any]]:
        return record_set.to_disk_doc()

    def fetch_all(self) -> ProductCatalog:
        return self.query_all()

    def find_by_id(self, product_id: RecordId) -> Product | None:
        return self.load().find(product_id)

    def save_product(self, product: Product) -> Product:
        """
        Insert or replace by id. A product without an id gets a fresh one.
        A replacement keeps the id exactly as it was stored.
        """
        stored = product.model_copy(deep=True)
        if stored.id is None:
            stored.id = uuid.uuid4().hex
        with self.mutate() as m:
            catalog = m.record_set
            for i, existing in enumerate(catalog.products):
                if same_id(existing.id, stored.id):
                    stored.id = existing.id
                    catalog.products[i] = stored
                    break
            else:
                catalog.products.append(stored)
        return stored

    def delete_product(self, product_id: RecordId) -> Product | None:
        """Remove a product; returns the removed product or None (no write) if unknown."""
        with self.mutate() as m:
            catalog = m.record_set
            removed = catalog.find(product_id)
            if removed is None:
                m.abort()
                return None
            catalog.products = [p for p in catalog.products if p is not removed]
        return removed
