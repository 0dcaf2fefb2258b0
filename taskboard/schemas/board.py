from datetime import datetime
from typing import Optional, List
from sqlmodel import SQLModel
from .board_list import FullBoardList
from .member import MemberRead
from .user import UserPublic


class BoardCreate(SQLModel):
    title: str




class BoardUpdate(SQLModel):
    title: str




class BoardRead(SQLModel):
    id: str
    title: str
    owner_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    owner: UserPublic
    members: List[MemberRead] = []




class BoardSummary(BoardRead):
    list_count: int = 0
    member_count: int = 0




class FullBoard(BoardRead):
    lists: List[FullBoardList] = []




class BoardDeleted(SQLModel):
    id: str
    title: str
