from __future__ import annotations

from fastapi import Request

from persistence.repositories import AsyncShopRepository


def shop_repo(request: Request) -> AsyncShopRepository:
    return request.app.state.shop_repo
