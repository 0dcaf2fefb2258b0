from datetime import datetime
from typing import Optional, List
from sqlmodel import SQLModel, Field
from pydantic import StrictInt
from ..models import MIN_ORDER, MAX_ORDER
from .card import CardRead


class BoardListCreate(SQLModel):
    title: str




class BoardListUpdate(SQLModel):
    title: str




class BoardListRead(SQLModel):
    id: str
    board_id: str
    title: str
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None




class FullBoardList(BoardListRead):
    cards: List[CardRead] = []




class ListOrder(SQLModel):
    id: str = Field(min_length=1)
    order: StrictInt = Field(ge=MIN_ORDER, le=MAX_ORDER)




class ListReorderRequest(SQLModel):
    lists: List[ListOrder] = Field(min_length=1)




class BoardListDeleted(SQLModel):
    id: str
    title: str
