from typing import Literal
from sqlmodel import SQLModel
from pydantic import EmailStr
from .user import UserPublic


class MemberInvite(SQLModel):
    email: EmailStr




class MemberRead(SQLModel):
    id: str
    role: Literal["owner", "member"]
    user: UserPublic
