from fastapi import APIRouter, Depends
from sqlmodel import Session
from taskboard.database import get_session
from taskboard.dependencies import deadline_dependency
from taskboard.schemas.board_list import BoardListDeleted, BoardListUpdate, FullBoardList, ListReorderRequest
from taskboard.schemas.card import CardCreate, CardRead
from taskboard.schemas.common import ReorderResult
from taskboard.services import cards, lists
from taskboard.services.auth import user_dependency


router = APIRouter(prefix="/lists", tags=["Lists"])
db_session = Depends(get_session)


# Declared before "/{list_id}" so "reorder" is not taken for an id
@router.put("/reorder", response_model=ReorderResult)
async def reorder_lists(current_user: user_dependency, body: ListReorderRequest,
                        deadline: deadline_dependency, session: Session = db_session):
    return lists.reorder_lists(session, current_user.id, body.lists, deadline)


@router.put("/{list_id}", response_model=FullBoardList)
async def update_list(current_user: user_dependency, list_id: str, board_list: BoardListUpdate,
                      deadline: deadline_dependency, session: Session = db_session):
    return lists.update_list(session, current_user.id, list_id, board_list.title, deadline)


@router.delete("/{list_id}", response_model=BoardListDeleted)
async def delete_list(current_user: user_dependency, list_id: str,
                      deadline: deadline_dependency, session: Session = db_session):
    return lists.delete_list(session, current_user.id, list_id, deadline)


@router.post("/{list_id}/cards", response_model=CardRead, status_code=201)
async def create_card(current_user: user_dependency, list_id: str, card: CardCreate,
                      deadline: deadline_dependency, session: Session = db_session):
    return cards.create_card(session, current_user.id, list_id, card, deadline)
