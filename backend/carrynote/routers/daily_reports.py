from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models
from ..database import get_db
from ..schemas.daily_report import DailyReportRead

router = APIRouter()


@router.get("/", response_model=list[DailyReportRead])
def list_all(
    driver_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: Session = Depends(get_db),
):
    query = db.query(models.DailyReport)
    if driver_id:
        query = query.filter(models.DailyReport.driver_id == driver_id)
    if date_from:
        query = query.filter(models.DailyReport.date >= date_from)
    if date_to:
        query = query.filter(models.DailyReport.date <= date_to)
    return query.order_by(models.DailyReport.date.desc(), models.DailyReport.created_at.desc()).all()


@router.get("/{report_id}", response_model=DailyReportRead)
def get_one(report_id: str, db: Session = Depends(get_db)):
    r = db.get(models.DailyReport, report_id)
    if not r:
        raise HTTPException(status_code=404, detail="Not found")
    return r
