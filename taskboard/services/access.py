from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Tuple

from sqlmodel import Session, select

from ..errors import AccessDenied, NotFound
from ..models import Board, BoardMember, BoardList, Card


class AccessLevel(str, Enum):
    owner = "owner"
    member = "member"
    denied = "denied"


@dataclass(frozen=True)
class AccessContext:
    """Everything needed to decide access to one board, loaded once per operation."""
    board_id: str
    owner_id: str
    member_ids: FrozenSet[str]


def authorize(user_id: str, context: AccessContext) -> AccessLevel:
    if context.owner_id == user_id:
        return AccessLevel.owner
    if user_id in context.member_ids:
        return AccessLevel.member
    return AccessLevel.denied


def has_access(user_id: str, context: AccessContext) -> bool:
    return authorize(user_id, context) is not AccessLevel.denied


def require_member(user_id: str, context: AccessContext,
                   detail: str = "Access denied. You are not a member of this board.") -> AccessLevel:
    """Owner or member may proceed."""
    if not has_access(user_id, context):
        raise AccessDenied(detail)
    return authorize(user_id, context)


def require_owner(user_id: str, context: AccessContext, action: str = "update") -> AccessLevel:
    level = authorize(user_id, context)
    if level is not AccessLevel.owner:
        raise AccessDenied(f"Access denied. Only the board owner can {action} the board.")
    return level


def build_context(session: Session, board: Board) -> AccessContext:
    statement = select(BoardMember.user_id).where(BoardMember.board_id == board.id)
    member_ids = frozenset(session.exec(statement).all())
    return AccessContext(board_id=board.id, owner_id=board.owner_id, member_ids=member_ids)


def load_board(session: Session, board_id: str) -> Tuple[Board, AccessContext]:
    board = session.get(Board, board_id)
    if not board:
        raise NotFound("Board not found")
    return board, build_context(session, board)


def load_list(session: Session, list_id: str,
              detail: str = "List not found") -> Tuple[BoardList, AccessContext]:
    board_list = session.get(BoardList, list_id)
    if not board_list:
        raise NotFound(detail)
    board = session.get(Board, board_list.board_id)
    return board_list, build_context(session, board)


def load_card(session: Session, card_id: str) -> Tuple[Card, AccessContext]:
    card = session.get(Card, card_id)
    if not card:
        raise NotFound("Card not found")
    board = session.exec(
        select(Board).join(BoardList, BoardList.board_id == Board.id)
        .where(BoardList.id == card.list_id)
    ).one()
    return card, build_context(session, board)
