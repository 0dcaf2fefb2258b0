from datetime import datetime
from sqlmodel import SQLModel


class Message(SQLModel):
    message: str




class ReorderResult(Message):
    updated: int




class Health(SQLModel):
    status: str
    timestamp: datetime
