from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from endpoints import shop_repo
from persistence.catalog import Product

router = APIRouter(prefix="/admin", tags=["admin"])


def _build_product(*, product_id: str | None, title: str, image_url: str, price: str, description: str) -> Product:
    try:
        return Product(
            id=product_id,
            title=title.strip(),
            imageUrl=image_url.strip(),
            price=price,
            description=description.strip(),
        )
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise HTTPException(status_code=400, detail=f"invalid_product: {', '.join(fields)}")


@router.get("/products")
async def admin_products(request: Request) -> dict[str, Any]:
    products = await shop_repo(request).list_products()
    return {"products": [p.model_dump(mode="json") for p in products]}


@router.post("/add-product")
async def add_product(
    request: Request,
    title: str = Form(...),
    imageUrl: str = Form(""),
    price: str = Form(...),
    description: str = Form(""),
):
    product = _build_product(product_id=None, title=title, image_url=imageUrl, price=price, description=description)
    await shop_repo(request).save_product(product)
    return RedirectResponse(url="/", status_code=302)


@router.get("/edit-product/{product_id}")
async def edit_product_form(product_id: str, request: Request, edit: bool = False):
    if not edit:
        return RedirectResponse(url="/", status_code=302)
    product = await shop_repo(request).get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="unknown_product")
    return {"editing": True, "product": product.model_dump(mode="json")}


@router.post("/edit-product")
async def edit_product(
    request: Request,
    productId: str = Form(...),
    title: str = Form(...),
    imageUrl: str = Form(""),
    price: str = Form(...),
    description: str = Form(""),
):
    repo = shop_repo(request)
    if await repo.get_product(productId) is None:
        raise HTTPException(status_code=404, detail="unknown_product")
    product = _build_product(product_id=productId, title=title, image_url=imageUrl, price=price, description=description)
    await repo.save_product(product)
    return RedirectResponse(url="/admin/products", status_code=302)


@router.post("/delete-product")
async def delete_product(request: Request, productId: str = Form(...)):
    await shop_repo(request).delete_product(productId)
    return RedirectResponse(url="/admin/products", status_code=302)
