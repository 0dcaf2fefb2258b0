from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel
from pydantic import EmailStr


class UserCreate(SQLModel):
    email: EmailStr
    password: str
    name: str




class UserLogin(SQLModel):
    email: EmailStr
    password: str




class UserPublic(SQLModel):
    id: str
    email: EmailStr
    name: str




class UserRead(UserPublic):
    created_at: Optional[datetime] = None
