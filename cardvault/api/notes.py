"""
Card note endpoints.

Notes are created and deleted, never edited. A note can only be attached
to a card the caller owns.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from cardvault.api.deps import CurrentUser, DbSession
from cardvault.db import (
    count_notes,
    create_note,
    delete_note,
    get_card,
    get_note,
    list_notes,
    note_to_model,
)
from cardvault.models.failure import NotFoundError
from cardvault.models.records import CountResponse, Note, NoteFields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[Note])
async def list_user_notes(
    auth: CurrentUser,
    session: DbSession,
    card_id: Annotated[str | None, Query(alias="cardId")] = None,
) -> list[Note]:
    """The caller's notes, optionally only those on one card."""
    notes = await list_notes(session, auth.username, card_id)
    return [note_to_model(note) for note in notes]


@router.get("/count", response_model=CountResponse)
async def count_user_notes(auth: CurrentUser, session: DbSession) -> CountResponse:
    return CountResponse(count=await count_notes(session, auth.username))


@router.post("", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_user_note(fields: NoteFields, auth: CurrentUser, session: DbSession) -> Note:
    """Attach a note to one of the caller's cards."""
    if await get_card(session, auth.username, fields.card_id) is None:
        raise NotFoundError("card", fields.card_id)

    note = await create_note(session, auth.username, fields)
    logger.info("User %s added note %s to card %s", auth.username, note.id, note.card_id)
    return note_to_model(note)


@router.get("/{note_id}", response_model=Note)
async def get_user_note(note_id: str, auth: CurrentUser, session: DbSession) -> Note:
    note = await get_note(session, auth.username, note_id)
    if note is None:
        raise NotFoundError("note", note_id)
    return note_to_model(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_note(note_id: str, auth: CurrentUser, session: DbSession) -> Response:
    if not await delete_note(session, auth.username, note_id):
        raise NotFoundError("note", note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
