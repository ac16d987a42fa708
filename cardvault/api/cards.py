"""
Card collection endpoints.

CRUD over the caller's cards. Deleting a card also deletes its notes.
"""

import logging

from fastapi import APIRouter, Response, status

from cardvault.api.deps import CurrentUser, DbSession
from cardvault.db import (
    card_to_model,
    count_cards,
    create_card,
    delete_card,
    get_card,
    list_cards,
    replace_card,
)
from cardvault.models.failure import NotFoundError
from cardvault.models.records import Card, CardFields, CountResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=list[Card])
async def list_user_cards(auth: CurrentUser, session: DbSession) -> list[Card]:
    """All of the caller's cards, newest first. Empty list if none."""
    return [card_to_model(card) for card in await list_cards(session, auth.username)]


@router.get("/count", response_model=CountResponse)
async def count_user_cards(auth: CurrentUser, session: DbSession) -> CountResponse:
    return CountResponse(count=await count_cards(session, auth.username))


@router.post("", response_model=Card, status_code=status.HTTP_201_CREATED)
async def create_user_card(fields: CardFields, auth: CurrentUser, session: DbSession) -> Card:
    """Add a card to the caller's collection."""
    card = await create_card(session, auth.username, fields)
    logger.info("User %s added card %s (%s)", auth.username, card.id, card.name)
    return card_to_model(card)


@router.get("/{card_id}", response_model=Card)
async def get_user_card(card_id: str, auth: CurrentUser, session: DbSession) -> Card:
    card = await get_card(session, auth.username, card_id)
    if card is None:
        raise NotFoundError("card", card_id)
    return card_to_model(card)


@router.put("/{card_id}", response_model=Card)
async def update_user_card(
    card_id: str, fields: CardFields, auth: CurrentUser, session: DbSession
) -> Card:
    """
    Replace a card's fields wholesale.

    Optional fields left out of the request revert to their defaults.
    The id, owner and creation time never change.
    """
    card = await get_card(session, auth.username, card_id)
    if card is None:
        raise NotFoundError("card", card_id)
    card = await replace_card(session, card, fields)
    return card_to_model(card)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_card(card_id: str, auth: CurrentUser, session: DbSession) -> Response:
    """
    Delete a card and its notes.

    Not idempotent: deleting an already-deleted card is NotFound.
    """
    if not await delete_card(session, auth.username, card_id):
        raise NotFoundError("card", card_id)
    logger.info("User %s deleted card %s", auth.username, card_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
