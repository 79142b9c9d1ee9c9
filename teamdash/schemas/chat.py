# teamdash/schemas/chat.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from teamdash.core.enums import GroupType


class Group(BaseModel):
    id: int
    name: str
    type: GroupType
    project_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MessageSender(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class Message(BaseModel):
    id: int
    content: str
    created_at: datetime
    group_id: int
    sender: MessageSender

    class Config:
        from_attributes = True
