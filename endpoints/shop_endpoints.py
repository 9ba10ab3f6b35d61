from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from endpoints import shop_repo

router = APIRouter(tags=["shop"])
logger = logging.getLogger(__name__)


@router.get("/")
@router.get("/products")
async def list_products(request: Request) -> dict[str, Any]:
    products = await shop_repo(request).list_products()
    return {"products": [p.model_dump(mode="json") for p in products]}


@router.get("/products/{product_id}")
async def product_detail(product_id: str, request: Request) -> dict[str, Any]:
    product = await shop_repo(request).get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="unknown_product")
    return {"product": product.model_dump(mode="json")}


@router.get("/cart")
async def get_cart(request: Request) -> dict[str, Any]:
    cart = await shop_repo(request).get_cart()
    return cart.model_dump(mode="json")


@router.post("/cart")
async def post_cart(request: Request, productId: str = Form(...)):
    try:
        await shop_repo(request).add_to_cart(productId)
    except LookupError:
        raise HTTPException(status_code=404, detail="unknown_product")
    return RedirectResponse(url="/cart", status_code=302)


@router.post("/cart-delete-item")
async def post_cart_delete_item(request: Request, productId: str = Form(...)):
    removed = await shop_repo(request).remove_from_cart(productId)
    if not removed:
        logger.debug("CART REMOVE: nothing to remove for %s", productId)
    return RedirectResponse(url="/cart", status_code=302)
