# models/messages.py - Conversation message models
from pydantic import BaseModel, HttpUrl
from typing import Optional


class SendMessageRequest(BaseModel):
    senderId: str
    text: Optional[str] = None
    imageUrl: Optional[HttpUrl] = None

    def has_content(self) -> bool:
        return bool(self.text) or self.imageUrl is not None
