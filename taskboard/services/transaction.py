import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..errors import TaskBoardError, InternalError, DeadlineExceeded
from ..utils.time import deadline_passed


# Logger
logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(session: Session, deadline: Optional[float] = None) -> Iterator[Session]:
    """
    Runs the enclosed block as one transaction on ``session``.

    The block commits once, at the end. Any domain error rolls everything back
    and is re-raised unchanged; store failures are rolled back, logged and
    surfaced as :class:`InternalError` so the cause never reaches the caller.

    Args:
        session: Store handle owned by the caller.
        deadline: Absolute ``time.monotonic()`` value. Checked on entry and
            again right before commit.

    Raises:
        DeadlineExceeded: If the deadline passed before commit.
        InternalError: If the store failed.
    """
    try:
        if deadline_passed(deadline):
            raise DeadlineExceeded()
        yield session
        if deadline_passed(deadline):
            raise DeadlineExceeded()
        session.commit()
    except TaskBoardError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Store failure, transaction rolled back: {e}")
        raise InternalError() from e
    except Exception:
        session.rollback()
        raise
