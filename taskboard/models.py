from datetime import datetime
from sqlalchemy import (UniqueConstraint, CheckConstraint, JSON,
                        Column, String, ForeignKey, event)
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from uuid import uuid4
from .utils.time import get_time_stamp


# Children are deleted through the ORM as well as by the database, so the
# no-orphan rule holds even on stores without native ON DELETE CASCADE.
CASCADE = {"cascade": "all, delete"}

# Ranks are stored as signed 64-bit integers
MIN_ORDER = -2**63
MAX_ORDER = 2**63 - 1


class User(SQLModel, table=True):
    __tablename__ = 'users'
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)
    hashed_password: str
    created_at: datetime = Field(default_factory=get_time_stamp)
    updated_at: datetime = Field(default_factory=get_time_stamp)

    # Relationships
    owned_boards: List["Board"] = Relationship(back_populates='owner')
    memberships: List["BoardMember"] = Relationship(back_populates='user')




class Board(SQLModel, table=True):
    __tablename__ = 'boards'
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str = Field(max_length=255, sa_column_kwargs={"nullable": False})
    owner_id: str = Field(
        sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    created_at: datetime = Field(default_factory=get_time_stamp)
    updated_at: datetime = Field(default_factory=get_time_stamp)

    # Relationships
    owner: Optional["User"] = Relationship(back_populates='owned_boards')
    members: List["BoardMember"] = Relationship(back_populates='board',
                                                sa_relationship_kwargs=CASCADE)
    lists: List["BoardList"] = Relationship(back_populates='board',
                                            sa_relationship_kwargs=CASCADE)




class BoardMember(SQLModel, table=True):
    __tablename__ = 'board_members'
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    board_id: str = Field(
        sa_column=Column(ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    user_id: str = Field(
        sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    role: str = Field(
        default="member",
        max_length=50,
        sa_column=Column(String(50), CheckConstraint("role IN ('owner', 'member')"))
    )
    created_at: datetime = Field(default_factory=get_time_stamp)

    # Defining the UNIQUE constraint on (board_id, user_id)
    __table_args__ = (
        UniqueConstraint("board_id", "user_id", name="unique_board_user"),
    )

    # Relationships
    board: Optional["Board"] = Relationship(back_populates='members')
    user: Optional["User"] = Relationship(back_populates='memberships')




class BoardList(SQLModel, table=True):
    __tablename__ = 'lists'
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str = Field(max_length=255, sa_column_kwargs={"nullable": False})
    board_id: str = Field(
        sa_column=Column(ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    order: int = Field(default=0, sa_column_kwargs={"nullable": False})
    created_at: datetime = Field(default_factory=get_time_stamp)
    updated_at: datetime = Field(default_factory=get_time_stamp)

    # Relationships
    board: Optional["Board"] = Relationship(back_populates='lists')
    cards: List["Card"] = Relationship(back_populates='list',
                                       sa_relationship_kwargs=CASCADE)




class Card(SQLModel, table=True):
    __tablename__ = 'cards'
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    list_id: str = Field(
        sa_column=Column(ForeignKey("lists.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    title: str = Field(max_length=255, sa_column_kwargs={"nullable": False})
    description: Optional[str] = Field(default=None)
    labels: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    due_date: Optional[datetime] = Field(default=None)
    order: int = Field(default=0, sa_column_kwargs={"nullable": False})
    created_at: datetime = Field(default_factory=get_time_stamp)
    updated_at: datetime = Field(default_factory=get_time_stamp)

    # Relationships
    list: Optional["BoardList"] = Relationship(back_populates='cards')
    comments: List["Comment"] = Relationship(back_populates='card',
                                             sa_relationship_kwargs=CASCADE)




class Comment(SQLModel, table=True):
    __tablename__ = 'comments'
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    card_id: str = Field(
        sa_column=Column(ForeignKey("cards.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    author_id: str = Field(
        sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    )
    body: str = Field(sa_column_kwargs={"nullable": False})
    created_at: datetime = Field(default_factory=get_time_stamp)

    # Relationships
    card: Optional["Card"] = Relationship(back_populates='comments')
    author: Optional["User"] = Relationship()




@event.listens_for(SQLModel, "before_update", propagate=True)
def auto_update_timestamp(_, __, target):
    if hasattr(target, "updated_at"):
        target.updated_at = get_time_stamp()
