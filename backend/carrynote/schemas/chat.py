import datetime

from pydantic import BaseModel


class ChatMessageCreate(BaseModel):
    driver_id: str | None = None
    text: str | None = None
    sender: str | None = None


class ChatMessageRead(BaseModel):
    id: int
    driver_id: str
    text: str
    sender: str
    read: bool = False
    read_at: datetime.datetime | None = None
    created_at: datetime.datetime | None = None

    model_config = {
        "from_attributes": True,
    }


class ChatThread(BaseModel):
    driver_id: str
    messages: list[ChatMessageRead]
    total: int


class ChatMessageResponse(BaseModel):
    success: bool
    message: str
    data: ChatMessageRead


class UnreadCount(BaseModel):
    driver_id: str
    unread_count: int


class UnreadCounts(BaseModel):
    unread_counts: dict[str, int]
    total: int
