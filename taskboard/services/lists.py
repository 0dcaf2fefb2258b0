import logging
from typing import Sequence

from sqlmodel import Session, select

from ..models import BoardList, Card
from ..schemas.board_list import BoardListDeleted, FullBoardList, ListOrder
from ..schemas.card import CardRead
from ..schemas.common import ReorderResult
from .access import load_board, load_list, require_member
from .boards import clean_title
from .ordering import apply_reorder, next_list_order, parse_reorder_items
from .transaction import unit_of_work


# Logger
logger = logging.getLogger(__name__)


def _full_list(session: Session, board_list: BoardList) -> FullBoardList:
    cards = session.exec(
        select(Card)
        .where(Card.list_id == board_list.id)
        .order_by(Card.order, Card.created_at)
    ).all()
    return FullBoardList(**board_list.model_dump(),
                         cards=[CardRead.model_validate(card) for card in cards])


def create_list(session: Session, user_id: str, board_id: str, title: str,
                deadline: float = None) -> FullBoardList:
    """Appends a list to the board at ``max(order) + 1``."""
    with unit_of_work(session, deadline):
        board, context = load_board(session, board_id)
        require_member(user_id, context)
        new_list = BoardList(
            title=clean_title(title, "List"),
            board_id=board.id,
            order=next_list_order(session, board.id),
        )
        session.add(new_list)

    session.refresh(new_list)
    logger.info(f"List {new_list.id} created on board {board_id} at order {new_list.order}")
    return _full_list(session, new_list)


def update_list(session: Session, user_id: str, list_id: str, title: str,
                deadline: float = None) -> FullBoardList:
    with unit_of_work(session, deadline):
        board_list, context = load_list(session, list_id)
        require_member(user_id, context)
        board_list.title = clean_title(title, "List")
        session.add(board_list)

    session.refresh(board_list)
    return _full_list(session, board_list)


def delete_list(session: Session, user_id: str, list_id: str,
                deadline: float = None) -> BoardListDeleted:
    """Deletes the list together with its cards and their comments."""
    with unit_of_work(session, deadline):
        board_list, context = load_list(session, list_id)
        require_member(user_id, context)
        deleted = BoardListDeleted(id=board_list.id, title=board_list.title)
        session.delete(board_list)

    logger.info(f"List {deleted.id} deleted by {user_id}")
    return deleted


def reorder_lists(session: Session, user_id: str, items: Sequence[ListOrder],
                  deadline: float = None) -> ReorderResult:
    """
    Rewrites the order of several lists at once.

    Access is checked on the board of the first list; every other list must
    live on that same board. Either all orders are written or none.
    """
    pairs = parse_reorder_items(items, "list")
    with unit_of_work(session, deadline):
        _, context = load_list(session, pairs[0][0])
        require_member(user_id, context)
        updated = apply_reorder(session, BoardList, pairs, context)

    logger.info(f"Lists reordered on board {context.board_id} by {user_id}")
    return ReorderResult(message="Lists reordered successfully", updated=updated)
