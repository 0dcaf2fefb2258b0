import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlmodel import Session, select, func, or_

from ..errors import NotFound, ValidationError
from ..models import Board, BoardList, BoardMember, Card, User
from ..schemas.board import BoardCreate, BoardDeleted, BoardRead, BoardSummary, BoardUpdate, FullBoard
from ..schemas.board_list import FullBoardList
from ..schemas.card import CardRead
from ..schemas.member import MemberInvite, MemberRead
from ..schemas.user import UserPublic
from .access import load_board, require_member, require_owner
from .transaction import unit_of_work


# Logger
logger = logging.getLogger(__name__)


def clean_title(title: Optional[str], entity: str) -> str:
    """Trimmed title, or ``ValidationError`` when blank."""
    if title is None or not title.strip():
        raise ValidationError(f"{entity} title is required")
    return title.strip()


def _members(session: Session, board_id: str) -> List[MemberRead]:
    statement = (
        select(BoardMember, User)
        .join(User, BoardMember.user_id == User.id)
        .where(BoardMember.board_id == board_id)
        .order_by(BoardMember.created_at)
    )
    return [
        MemberRead(id=member.id, role=member.role, user=UserPublic.model_validate(user))
        for member, user in session.exec(statement).all()
    ]


def _board_read(session: Session, board: Board) -> Dict:
    owner = session.get(User, board.owner_id)
    return dict(
        id=board.id,
        title=board.title,
        owner_id=board.owner_id,
        created_at=board.created_at,
        updated_at=board.updated_at,
        owner=UserPublic.model_validate(owner),
        members=_members(session, board.id),
    )


def _ordered_lists(session: Session, board_id: str) -> List[FullBoardList]:
    lists = session.exec(
        select(BoardList)
        .where(BoardList.board_id == board_id)
        .order_by(BoardList.order, BoardList.created_at)
    ).all()
    cards = session.exec(
        select(Card)
        .join(BoardList, Card.list_id == BoardList.id)
        .where(BoardList.board_id == board_id)
        .order_by(Card.order, Card.created_at)
    ).all()
    cards_by_list = defaultdict(list)
    for card in cards:
        cards_by_list[card.list_id].append(CardRead.model_validate(card))
    return [
        FullBoardList(**board_list.model_dump(), cards=cards_by_list[board_list.id])
        for board_list in lists
    ]


def list_boards(session: Session, user_id: str, deadline: float = None) -> List[BoardSummary]:
    """Boards the user owns or is a member of, newest first."""
    with unit_of_work(session, deadline):
        member_of = select(BoardMember.board_id).where(BoardMember.user_id == user_id)
        boards = session.exec(
            select(Board)
            .where(or_(Board.owner_id == user_id, Board.id.in_(member_of)))
            .order_by(Board.created_at.desc())
        ).all()
        summaries = []
        for board in boards:
            list_count = session.exec(
                select(func.count()).select_from(BoardList).where(BoardList.board_id == board.id)
            ).one()
            data = _board_read(session, board)
            summaries.append(BoardSummary(
                **data,
                list_count=list_count,
                member_count=len(data["members"]),
            ))
    return summaries


def create_board(session: Session, user_id: str, data: BoardCreate,
                 deadline: float = None) -> BoardRead:
    """Creates the board and its owner membership in one transaction."""
    title = clean_title(data.title, "Board")
    with unit_of_work(session, deadline):
        if not session.get(User, user_id):
            raise NotFound("User not found")
        new_board = Board(title=title, owner_id=user_id)
        session.add(new_board)
        session.add(BoardMember(board_id=new_board.id, user_id=user_id, role="owner"))

    session.refresh(new_board)
    logger.info(f"Board {new_board.id} created by {user_id}")
    return BoardRead(**_board_read(session, new_board))


def get_board(session: Session, user_id: str, board_id: str,
              deadline: float = None) -> FullBoard:
    with unit_of_work(session, deadline):
        board, context = load_board(session, board_id)
        require_member(user_id, context)
        full_board = FullBoard(**_board_read(session, board),
                               lists=_ordered_lists(session, board.id))
    return full_board


def update_board(session: Session, user_id: str, board_id: str, data: BoardUpdate,
                 deadline: float = None) -> BoardRead:
    with unit_of_work(session, deadline):
        board, context = load_board(session, board_id)
        require_owner(user_id, context, "update")
        board.title = clean_title(data.title, "Board")
        session.add(board)

    session.refresh(board)
    logger.info(f"Board {board.id} renamed by {user_id}")
    return BoardRead(**_board_read(session, board))


def delete_board(session: Session, user_id: str, board_id: str,
                 deadline: float = None) -> BoardDeleted:
    """Deletes the board with its members, lists, cards and comments."""
    with unit_of_work(session, deadline):
        board, context = load_board(session, board_id)
        require_owner(user_id, context, "delete")
        deleted = BoardDeleted(id=board.id, title=board.title)
        session.delete(board)

    logger.info(f"Board {deleted.id} deleted by {user_id}")
    return deleted


def add_member(session: Session, user_id: str, board_id: str, data: MemberInvite,
               deadline: float = None) -> MemberRead:
    """Grants member access on a board to the user registered under ``data.email``."""
    with unit_of_work(session, deadline):
        board, context = load_board(session, board_id)
        require_owner(user_id, context, "invite members to")
        invitee = session.exec(
            select(User).where(User.email == data.email.strip().lower())
        ).first()
        if not invitee:
            raise NotFound("User not found")
        if invitee.id == context.owner_id or invitee.id in context.member_ids:
            raise ValidationError("User is already a member of the board")
        new_member = BoardMember(board_id=board.id, user_id=invitee.id, role="member")
        session.add(new_member)

    session.refresh(new_member)
    logger.info(f"User {new_member.user_id} added to board {board_id} by {user_id}")
    return MemberRead(id=new_member.id, role=new_member.role,
                      user=UserPublic.model_validate(invitee))
