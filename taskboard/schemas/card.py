from datetime import datetime
from typing import Optional, List
from sqlmodel import SQLModel, Field
from pydantic import StrictInt
from ..models import MIN_ORDER, MAX_ORDER
from .comment import CommentRead


class CardCreate(SQLModel):
    title: str
    description: Optional[str] = None
    labels: Optional[List[str]] = None
    due_date: Optional[datetime] = None




class CardUpdate(SQLModel):
    title: Optional[str] = None
    description: Optional[str] = None
    labels: Optional[List[str]] = None
    due_date: Optional[datetime] = None




class CardRead(SQLModel):
    id: str
    list_id: str
    title: str
    description: Optional[str] = None
    labels: List[str] = []
    due_date: Optional[datetime] = None
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None




class CardFull(CardRead):
    comments: List[CommentRead] = []




class CardMove(SQLModel):
    list_id: str = Field(min_length=1)
    order: StrictInt = Field(ge=MIN_ORDER, le=MAX_ORDER)




class CardOrder(SQLModel):
    id: str = Field(min_length=1)
    order: StrictInt = Field(ge=MIN_ORDER, le=MAX_ORDER)




class CardReorderRequest(SQLModel):
    cards: List[CardOrder] = Field(min_length=1)




class CardDeleted(SQLModel):
    id: str
    title: str
