from datetime import datetime
from sqlmodel import SQLModel
from .user import UserPublic


class CommentRead(SQLModel):
    id: str
    card_id: str
    body: str
    created_at: datetime
    author: UserPublic
