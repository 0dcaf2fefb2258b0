from sqlmodel import SQLModel
from .user import UserPublic


class TokenData(SQLModel):
    """Identity resolved from a bearer token."""
    id: str
    email: str




class AuthResponse(SQLModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserPublic
