from fastapi import APIRouter, Depends
from sqlmodel import Session
from taskboard.database import get_session
from taskboard.dependencies import deadline_dependency
from taskboard.schemas.card import CardDeleted, CardFull, CardMove, CardRead, CardReorderRequest, CardUpdate
from taskboard.schemas.common import ReorderResult
from taskboard.services import cards
from taskboard.services.auth import user_dependency


router = APIRouter(prefix="/cards", tags=["Cards"])
db_session = Depends(get_session)


@router.put("/reorder", response_model=ReorderResult)
async def reorder_cards(current_user: user_dependency, body: CardReorderRequest,
                        deadline: deadline_dependency, session: Session = db_session):
    return cards.reorder_cards(session, current_user.id, body.cards, deadline)


@router.get("/{card_id}", response_model=CardFull)
async def get_card(current_user: user_dependency, card_id: str,
                   deadline: deadline_dependency, session: Session = db_session):
    return cards.get_card(session, current_user.id, card_id, deadline)


@router.put("/{card_id}", response_model=CardRead)
async def update_card(current_user: user_dependency, card_id: str, card: CardUpdate,
                      deadline: deadline_dependency, session: Session = db_session):
    return cards.update_card(session, current_user.id, card_id, card, deadline)


@router.delete("/{card_id}", response_model=CardDeleted)
async def delete_card(current_user: user_dependency, card_id: str,
                      deadline: deadline_dependency, session: Session = db_session):
    return cards.delete_card(session, current_user.id, card_id, deadline)


@router.put("/{card_id}/move", response_model=CardRead)
async def move_card(current_user: user_dependency, card_id: str, data: CardMove,
                    deadline: deadline_dependency, session: Session = db_session):
    return cards.move_card(session, current_user.id, card_id, data.list_id, data.order, deadline)
