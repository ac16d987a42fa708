"""
Wishlist endpoints.

CRUD over the caller's wishlist. Priority runs from 1 (most urgent) to 5.
"""

import logging

from fastapi import APIRouter, Response, status

from cardvault.api.deps import CurrentUser, DbSession
from cardvault.db import (
    count_wishlist_items,
    create_wishlist_item,
    delete_wishlist_item,
    get_wishlist_item,
    list_wishlist_items,
    replace_wishlist_item,
    wishlist_item_to_model,
)
from cardvault.models.failure import NotFoundError
from cardvault.models.records import CountResponse, WishlistFields, WishlistItem

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("", response_model=list[WishlistItem])
async def list_user_wishlist(auth: CurrentUser, session: DbSession) -> list[WishlistItem]:
    items = await list_wishlist_items(session, auth.username)
    return [wishlist_item_to_model(item) for item in items]


@router.get("/count", response_model=CountResponse)
async def count_user_wishlist(auth: CurrentUser, session: DbSession) -> CountResponse:
    return CountResponse(count=await count_wishlist_items(session, auth.username))


@router.post("", response_model=WishlistItem, status_code=status.HTTP_201_CREATED)
async def create_user_wishlist_item(
    fields: WishlistFields, auth: CurrentUser, session: DbSession
) -> WishlistItem:
    item = await create_wishlist_item(session, auth.username, fields)
    logger.info("User %s wishlisted %s", auth.username, item.name)
    return wishlist_item_to_model(item)


@router.get("/{item_id}", response_model=WishlistItem)
async def get_user_wishlist_item(
    item_id: str, auth: CurrentUser, session: DbSession
) -> WishlistItem:
    item = await get_wishlist_item(session, auth.username, item_id)
    if item is None:
        raise NotFoundError("wishlist item", item_id)
    return wishlist_item_to_model(item)


@router.put("/{item_id}", response_model=WishlistItem)
async def update_user_wishlist_item(
    item_id: str, fields: WishlistFields, auth: CurrentUser, session: DbSession
) -> WishlistItem:
    """Replace a wishlist item's fields wholesale; priority reverts to 3 if omitted."""
    item = await get_wishlist_item(session, auth.username, item_id)
    if item is None:
        raise NotFoundError("wishlist item", item_id)
    item = await replace_wishlist_item(session, item, fields)
    return wishlist_item_to_model(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_wishlist_item(
    item_id: str, auth: CurrentUser, session: DbSession
) -> Response:
    if not await delete_wishlist_item(session, auth.username, item_id):
        raise NotFoundError("wishlist item", item_id)
    logger.info("User %s removed wishlist item %s", auth.username, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
