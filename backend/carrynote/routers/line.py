"""LINE webhook: drivers send their daily report as a chat message."""
import json
import logging
from datetime import date, datetime, timedelta, timezone

import requests
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from .. import models
from ..config import Settings, get_settings
from ..database import get_db
from ..domain.report import ReportOutcome
from ..line import messages
from ..line.client import LineMessenger, get_messenger, validate_signature
from ..line.interpreter import interpret_message
from ..schemas.line import LineLinkRequest, LineLinkResponse
from .delivery_types import active_delivery_types

logger = logging.getLogger(__name__)

router = APIRouter()

JST = timezone(timedelta(hours=9), "JST")


def received_date(event: dict) -> date:
    """Date (JST) the message was received, from the event timestamp in ms."""
    ts = event.get("timestamp")
    if isinstance(ts, (int, float)):
        return datetime.fromtimestamp(ts / 1000, JST).date()
    return datetime.now(JST).date()


def find_driver_by_line_id(db: Session, line_user_id: str | None) -> models.Driver | None:
    if not line_user_id:
        return None
    return (
        db.query(models.Driver)
        .filter(models.Driver.line_user_id == line_user_id, models.Driver.active.is_(True))
        .first()
    )


def record_report(
    db: Session, driver: models.Driver, outcome: ReportOutcome, report_date: date
) -> models.DailyReport:
    """Store the matched entries of an accepted message as a daily report."""
    report = models.DailyReport(
        driver_id=driver.id,
        driver_name=driver.name,
        date=report_date,
        notes=outcome.note,
        source="line",
    )
    for position, m in enumerate(outcome.matched):
        report.details.append(models.DailyReportDetail(position=position, **m.model_dump()))
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


def notify_sender(messenger: LineMessenger, reply_token: str | None, text: str) -> bool:
    """Best-effort reply. Failures are logged and never raised."""
    if not reply_token:
        logger.warning("LINE event without replyToken, reply skipped")
        return False
    try:
        return messenger.reply(reply_token, text)
    except requests.RequestException:
        logger.exception("Failed to send LINE reply")
        return False


def handle_event(db: Session, messenger: LineMessenger, event: dict, settings: Settings) -> None:
    message = event.get("message")
    if event.get("type") != "message" or not isinstance(message, dict):
        return
    if message.get("type") != "text" or not isinstance(message.get("text"), str):
        return

    text = message["text"]
    reply_token = event.get("replyToken")
    if not isinstance(reply_token, str):
        reply_token = None
    source = event.get("source")
    user_id = source.get("userId") if isinstance(source, dict) else None
    driver = find_driver_by_line_id(db, user_id if isinstance(user_id, str) else None)

    if not driver:
        # 未登録ユーザーへの案内
        notify_sender(messenger, reply_token, messages.unknown_driver_message(settings.driver_app_url))
        return

    command = text.strip()
    if command in messages.HELP_COMMANDS:
        notify_sender(messenger, reply_token, messages.help_message(settings.driver_app_url))
        return
    if command in messages.FORMAT_COMMANDS:
        notify_sender(messenger, reply_token, messages.format_message())
        return

    received_on = received_date(event)
    outcome = interpret_message(text, active_delivery_types(db), driver.name, received_on)
    if outcome.accepted:
        report = record_report(db, driver, outcome, received_on)
        logger.info(
            "Recorded daily report %s for driver %s (%d items, %d unmatched)",
            report.id,
            driver.id,
            outcome.total_quantity,
            len(outcome.unmatched_labels),
        )
    else:
        logger.info("Daily report from driver %s not recorded: %s", driver.id, outcome.kind.value)

    notify_sender(messenger, reply_token, outcome.reply_text)


def process_events(db: Session, messenger: LineMessenger, events: list, settings: Settings) -> None:
    for event in events:
        if isinstance(event, dict):
            handle_event(db, messenger, event, settings)


@router.post("/webhook")
async def webhook(
    request: Request,
    db: Session = Depends(get_db),
    messenger: LineMessenger = Depends(get_messenger),
):
    body = await request.body()
    settings = get_settings()

    # 署名検証（チャネルシークレット設定時）
    if settings.line_channel_secret:
        signature = request.headers.get("x-line-signature")
        if not validate_signature(body, signature, settings.line_channel_secret):
            raise HTTPException(status_code=401, detail="Invalid signature")

    try:
        payload = json.loads(body or b"{}")
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON body")

    events = payload.get("events")
    if not isinstance(events, list):
        events = []
    await run_in_threadpool(process_events, db, messenger, events, settings)
    return {"success": True}


@router.post("/link", response_model=LineLinkResponse)
def link(payload: LineLinkRequest, db: Session = Depends(get_db)):
    if not payload.driver_id or not payload.line_user_id:
        raise HTTPException(status_code=400, detail="driver_id and line_user_id are required")

    driver = db.get(models.Driver, payload.driver_id)
    if not driver:
        raise HTTPException(status_code=404, detail="Driver not found")

    other = (
        db.query(models.Driver)
        .filter(models.Driver.line_user_id == payload.line_user_id, models.Driver.id != driver.id)
        .first()
    )
    if other:
        raise HTTPException(status_code=409, detail="LINE user is linked to another driver")

    driver.line_user_id = payload.line_user_id
    db.commit()
    logger.info("Linked LINE user to driver %s", driver.id)
    return LineLinkResponse(success=True, message="LINE連携を設定しました")
