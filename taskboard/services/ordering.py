"""
Position bookkeeping for lists inside a board and cards inside a list.

Positions are sparse integer ranks: ascending ``order`` is display order, gaps
are fine and values are never compacted, deduplicated or reused. A reorder is
always a bulk rewrite of the ranks the client sends.

None of these functions commit. They are meant to run inside
:func:`taskboard.services.transaction.unit_of_work`, which makes the whole
batch land or roll back together.
"""
import logging
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Type, Union

from sqlalchemy import update
from sqlmodel import Session, select

from ..errors import AccessDenied, NotFound, ValidationError
from ..models import BoardList, Card, MIN_ORDER, MAX_ORDER
from ..utils.time import get_time_stamp
from .access import AccessContext


# Logger
logger = logging.getLogger(__name__)

OrderedModel = Union[Type[BoardList], Type[Card]]


def next_order(existing_orders: Iterable[int]) -> int:
    """``max + 1`` of the sibling ranks, or ``0`` for an empty scope."""
    orders = list(existing_orders)
    if not orders:
        return 0
    return max(orders) + 1


def is_rank(value: Any) -> bool:
    """Integer that fits the stored 64-bit rank. ``bool`` never qualifies."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_ORDER <= value <= MAX_ORDER


def next_list_order(session: Session, board_id: str) -> int:
    statement = select(BoardList.order).where(BoardList.board_id == board_id)
    return next_order(session.exec(statement).all())


def next_card_order(session: Session, list_id: str) -> int:
    statement = select(Card.order).where(Card.list_id == list_id)
    return next_order(session.exec(statement).all())


def parse_reorder_items(items: Sequence[Any], label: str = "list") -> List[Tuple[str, int]]:
    """
    Normalizes a reorder payload into ``(id, order)`` pairs.

    Accepts mappings or objects exposing ``id`` and ``order``. Colliding or
    non-monotonic orders are kept as given.

    Raises:
        ValidationError: If the payload is empty, an entry has no id, or an
            order is not a 64-bit integer.
    """
    if not items:
        raise ValidationError(f"{label.capitalize()}s array is required")
    pairs = []
    for item in items:
        if isinstance(item, dict):
            item_id, order = item.get("id"), item.get("order")
        else:
            item_id, order = getattr(item, "id", None), getattr(item, "order", None)
        if not item_id or not is_rank(order):
            raise ValidationError(f"Each {label} must have id and order")
        pairs.append((str(item_id), order))
    return pairs


def _board_ids(session: Session, model: OrderedModel, ids: List[str]) -> Dict[str, str]:
    if model is BoardList:
        statement = select(BoardList.id, BoardList.board_id).where(BoardList.id.in_(ids))
    else:
        statement = (
            select(Card.id, BoardList.board_id)
            .join(BoardList, Card.list_id == BoardList.id)
            .where(Card.id.in_(ids))
        )
    return {row[0]: row[1] for row in session.exec(statement).all()}


def apply_reorder(session: Session, model: OrderedModel,
                  items: Sequence[Tuple[str, int]], context: AccessContext) -> int:
    """
    Writes every ``(id, order)`` pair of ``items``.

    ``context`` is the board the caller already authorized. Every id has to
    exist and belong to that board before anything is written; one UPDATE is
    then issued per pair in the caller's transaction.

    Returns:
        Number of rows written.

    Raises:
        NotFound: If any id does not exist.
        AccessDenied: If any id belongs to another board.
    """
    label = "List" if model is BoardList else "Card"
    ids = list(dict.fromkeys(item_id for item_id, _ in items))
    owners = _board_ids(session, model, ids)

    missing = [item_id for item_id in ids if item_id not in owners]
    if missing:
        raise NotFound(f"{label} not found")
    if any(board_id != context.board_id for board_id in owners.values()):
        raise AccessDenied(f"Access denied. Every {label.lower()} must belong to the same board.")

    for item_id, order in items:
        session.execute(
            update(model)
            .where(model.id == item_id)
            .values(order=order, updated_at=get_time_stamp())
            .execution_options(synchronize_session=False)
        )
    logger.debug(f"Reordered {len(items)} {label.lower()}s on board {context.board_id}")
    return len(items)


def move_card(session: Session, card: Card, target_list_id: str, new_order: int) -> Card:
    """Places ``card`` in ``target_list_id`` at ``new_order`` with a single row update."""
    if not is_rank(new_order):
        raise ValidationError("list_id and order are required")
    card.list_id = target_list_id
    card.order = new_order
    session.add(card)
    return card
