"""Messages between the office and each driver."""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models
from ..database import get_db
from ..schemas.chat import (
    ChatMessageCreate,
    ChatMessageRead,
    ChatMessageResponse,
    ChatThread,
    UnreadCount,
    UnreadCounts,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SENDERS = ("driver", "admin")


def unread_from_drivers(db: Session):
    # 事務所側の未読はドライバーからのメッセージだけ数える
    return db.query(models.ChatMessage).filter(
        models.ChatMessage.sender == "driver", models.ChatMessage.read.is_(False)
    )


@router.get("/messages/{driver_id}", response_model=ChatThread)
def list_messages(driver_id: str, db: Session = Depends(get_db)):
    messages = (
        db.query(models.ChatMessage)
        .filter(models.ChatMessage.driver_id == driver_id)
        .order_by(models.ChatMessage.id)
        .all()
    )
    return ChatThread(
        driver_id=driver_id,
        messages=[ChatMessageRead.model_validate(m) for m in messages],
        total=len(messages),
    )


@router.post("/messages", response_model=ChatMessageResponse, status_code=201)
def send_message(payload: ChatMessageCreate, db: Session = Depends(get_db)):
    if not payload.driver_id or not payload.text or not payload.sender:
        raise HTTPException(status_code=400, detail="driver_id, text and sender are required")
    if payload.sender not in SENDERS:
        raise HTTPException(status_code=400, detail='sender must be "driver" or "admin"')

    m = models.ChatMessage(driver_id=payload.driver_id, text=payload.text, sender=payload.sender)
    db.add(m)
    db.commit()
    db.refresh(m)
    logger.info("Chat message %s from %s for driver %s", m.id, m.sender, m.driver_id)
    return ChatMessageResponse(
        success=True, message="メッセージを送信しました", data=ChatMessageRead.model_validate(m)
    )


@router.put("/messages/{message_id}/read", response_model=ChatMessageResponse)
def mark_read(message_id: int, db: Session = Depends(get_db)):
    m = db.get(models.ChatMessage, message_id)
    if not m:
        raise HTTPException(status_code=404, detail="Message not found")
    m.read = True
    m.read_at = datetime.utcnow()
    db.commit()
    db.refresh(m)
    return ChatMessageResponse(
        success=True, message="メッセージを既読にしました", data=ChatMessageRead.model_validate(m)
    )


@router.get("/unread-count/{driver_id}", response_model=UnreadCount)
def unread_count(driver_id: str, db: Session = Depends(get_db)):
    count = unread_from_drivers(db).filter(models.ChatMessage.driver_id == driver_id).count()
    return UnreadCount(driver_id=driver_id, unread_count=count)


@router.get("/unread-counts", response_model=UnreadCounts)
def unread_counts(db: Session = Depends(get_db)):
    rows = (
        unread_from_drivers(db)
        .with_entities(models.ChatMessage.driver_id, func.count(models.ChatMessage.id))
        .group_by(models.ChatMessage.driver_id)
        .all()
    )
    counts = {driver_id: count for driver_id, count in rows}
    return UnreadCounts(unread_counts=counts, total=len(counts))
