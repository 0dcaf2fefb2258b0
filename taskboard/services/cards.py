import logging
from datetime import datetime
from typing import Optional, Sequence

from sqlmodel import Session, select

from ..errors import ValidationError
from ..models import Card, Comment, User
from ..schemas.card import CardCreate, CardDeleted, CardFull, CardOrder, CardRead, CardUpdate
from ..schemas.comment import CommentRead
from ..schemas.common import ReorderResult
from ..schemas.user import UserPublic
from .access import load_card, load_list, require_member
from .boards import clean_title
from .ordering import apply_reorder, is_rank, move_card as place_card, next_card_order, parse_reorder_items
from .transaction import unit_of_work
from ..utils.time import to_utc_aware


# Logger
logger = logging.getLogger(__name__)


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip() or None


def _clean_labels(labels) -> list:
    if labels is None:
        return []
    return [label.strip() for label in labels if label and label.strip()]


def _clean_due_date(due_date: Optional[datetime]) -> Optional[datetime]:
    # Dates sent without a zone are taken as UTC
    if due_date is None:
        return None
    return to_utc_aware(due_date)


def _comments(session: Session, card_id: str):
    statement = (
        select(Comment, User)
        .join(User, Comment.author_id == User.id)
        .where(Comment.card_id == card_id)
        .order_by(Comment.created_at.desc())
    )
    return [
        CommentRead(id=comment.id, card_id=comment.card_id, body=comment.body,
                    created_at=comment.created_at, author=UserPublic.model_validate(author))
        for comment, author in session.exec(statement).all()
    ]


def create_card(session: Session, user_id: str, list_id: str, data: CardCreate,
                deadline: float = None) -> CardRead:
    """Appends a card to the list at ``max(order) + 1``."""
    with unit_of_work(session, deadline):
        board_list, context = load_list(session, list_id)
        require_member(user_id, context)
        new_card = Card(
            title=clean_title(data.title, "Card"),
            description=_clean_description(data.description),
            labels=_clean_labels(data.labels),
            due_date=_clean_due_date(data.due_date),
            list_id=board_list.id,
            order=next_card_order(session, board_list.id),
        )
        session.add(new_card)

    session.refresh(new_card)
    logger.info(f"Card {new_card.id} created in list {list_id} at order {new_card.order}")
    return CardRead.model_validate(new_card)


def get_card(session: Session, user_id: str, card_id: str,
             deadline: float = None) -> CardFull:
    with unit_of_work(session, deadline):
        card, context = load_card(session, card_id)
        require_member(user_id, context)
        full_card = CardFull(**card.model_dump(), comments=_comments(session, card.id))
    return full_card


def update_card(session: Session, user_id: str, card_id: str, data: CardUpdate,
                deadline: float = None) -> CardRead:
    """Applies only the fields present in ``data``."""
    with unit_of_work(session, deadline):
        card, context = load_card(session, card_id)
        require_member(user_id, context)
        changes = data.model_dump(exclude_unset=True)
        if "title" in changes:
            if changes["title"] is None or not changes["title"].strip():
                raise ValidationError("Card title cannot be empty")
            card.title = changes["title"].strip()
        if "description" in changes:
            card.description = _clean_description(changes["description"])
        if "labels" in changes:
            card.labels = _clean_labels(changes["labels"])
        if "due_date" in changes:
            card.due_date = _clean_due_date(changes["due_date"])
        session.add(card)

    session.refresh(card)
    return CardRead.model_validate(card)


def delete_card(session: Session, user_id: str, card_id: str,
                deadline: float = None) -> CardDeleted:
    with unit_of_work(session, deadline):
        card, context = load_card(session, card_id)
        require_member(user_id, context)
        deleted = CardDeleted(id=card.id, title=card.title)
        session.delete(card)

    logger.info(f"Card {deleted.id} deleted by {user_id}")
    return deleted


def move_card(session: Session, user_id: str, card_id: str, list_id: str, order: int,
              deadline: float = None) -> CardRead:
    """
    Moves a card to ``list_id`` at ``order``, possibly on another board.

    The caller needs access to the card's current board and to the target
    list's board. List and order change in the same row update, so the card
    is never seen in two lists or in none.
    """
    if not list_id or not is_rank(order):
        raise ValidationError("list_id and order are required")
    with unit_of_work(session, deadline):
        card, source = load_card(session, card_id)
        require_member(user_id, source)
        target_list, target = load_list(session, list_id, "Target list not found")
        require_member(user_id, target,
                       "Access denied. You are not a member of the target board.")
        source_list_id = card.list_id
        place_card(session, card, target_list.id, order)

    session.refresh(card)
    logger.info(f"Card {card.id} moved from list {source_list_id} to {card.list_id} "
                f"at order {card.order} by {user_id}")
    return CardRead.model_validate(card)


def reorder_cards(session: Session, user_id: str, items: Sequence[CardOrder],
                  deadline: float = None) -> ReorderResult:
    """Rewrites card orders on the first card's board; list membership is untouched."""
    pairs = parse_reorder_items(items, "card")
    with unit_of_work(session, deadline):
        _, context = load_card(session, pairs[0][0])
        require_member(user_id, context)
        updated = apply_reorder(session, Card, pairs, context)

    logger.info(f"Cards reordered on board {context.board_id} by {user_id}")
    return ReorderResult(message="Cards reordered successfully", updated=updated)
