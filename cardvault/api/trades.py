"""
Trade listing endpoints.

Trades are created and deleted; there is no edit.
"""

import logging

from fastapi import APIRouter, Response, status

from cardvault.api.deps import CurrentUser, DbSession
from cardvault.db import (
    count_trades,
    create_trade,
    delete_trade,
    get_trade,
    list_trades,
    trade_to_model,
)
from cardvault.models.failure import NotFoundError
from cardvault.models.records import CountResponse, Trade, TradeFields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("", response_model=list[Trade])
async def list_user_trades(auth: CurrentUser, session: DbSession) -> list[Trade]:
    return [trade_to_model(trade) for trade in await list_trades(session, auth.username)]


@router.get("/count", response_model=CountResponse)
async def count_user_trades(auth: CurrentUser, session: DbSession) -> CountResponse:
    return CountResponse(count=await count_trades(session, auth.username))


@router.post("", response_model=Trade, status_code=status.HTTP_201_CREATED)
async def create_user_trade(fields: TradeFields, auth: CurrentUser, session: DbSession) -> Trade:
    trade = await create_trade(session, auth.username, fields)
    logger.info("User %s listed %s for trade", auth.username, trade.card_name)
    return trade_to_model(trade)


@router.get("/{trade_id}", response_model=Trade)
async def get_user_trade(trade_id: str, auth: CurrentUser, session: DbSession) -> Trade:
    trade = await get_trade(session, auth.username, trade_id)
    if trade is None:
        raise NotFoundError("trade", trade_id)
    return trade_to_model(trade)


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_trade(trade_id: str, auth: CurrentUser, session: DbSession) -> Response:
    if not await delete_trade(session, auth.username, trade_id):
        raise NotFoundError("trade", trade_id)
    logger.info("User %s removed trade %s", auth.username, trade_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
