from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List
from taskboard.database import get_session
from taskboard.dependencies import deadline_dependency
from taskboard.schemas.board import BoardCreate, BoardDeleted, BoardRead, BoardSummary, BoardUpdate, FullBoard
from taskboard.schemas.board_list import BoardListCreate, FullBoardList
from taskboard.schemas.member import MemberInvite, MemberRead
from taskboard.services import boards, lists
from taskboard.services.auth import user_dependency


router = APIRouter(prefix="/boards", tags=["Boards"])
db_session = Depends(get_session)


@router.get("", response_model=List[BoardSummary])
async def get_all_boards(current_user: user_dependency, deadline: deadline_dependency,
                         session: Session = db_session):
    return boards.list_boards(session, current_user.id, deadline)


@router.post("", response_model=BoardRead, status_code=201)
async def create_board(current_user: user_dependency, board: BoardCreate,
                       deadline: deadline_dependency, session: Session = db_session):
    return boards.create_board(session, current_user.id, board, deadline)


@router.get("/{board_id}", response_model=FullBoard)
async def get_board(current_user: user_dependency, board_id: str,
                    deadline: deadline_dependency, session: Session = db_session):
    return boards.get_board(session, current_user.id, board_id, deadline)


@router.put("/{board_id}", response_model=BoardRead)
async def update_board(current_user: user_dependency, board_id: str, board: BoardUpdate,
                       deadline: deadline_dependency, session: Session = db_session):
    return boards.update_board(session, current_user.id, board_id, board, deadline)


@router.delete("/{board_id}", response_model=BoardDeleted)
async def delete_board(current_user: user_dependency, board_id: str,
                       deadline: deadline_dependency, session: Session = db_session):
    return boards.delete_board(session, current_user.id, board_id, deadline)


@router.post("/{board_id}/members", response_model=MemberRead, status_code=201)
async def add_member(current_user: user_dependency, board_id: str, invite: MemberInvite,
                     deadline: deadline_dependency, session: Session = db_session):
    return boards.add_member(session, current_user.id, board_id, invite, deadline)


@router.post("/{board_id}/lists", response_model=FullBoardList, status_code=201)
async def create_list(current_user: user_dependency, board_id: str, board_list: BoardListCreate,
                      deadline: deadline_dependency, session: Session = db_session):
    return lists.create_list(session, current_user.id, board_id, board_list.title, deadline)
