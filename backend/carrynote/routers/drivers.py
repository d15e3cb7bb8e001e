from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models
from ..database import get_db
from ..schemas.driver import DriverCreate, DriverInfo, DriverRead, DriverUpdate

router = APIRouter()


def get_driver_or_404(db: Session, driver_id: str) -> models.Driver:
    d = db.get(models.Driver, driver_id)
    if not d:
        raise HTTPException(status_code=404, detail="Not found")
    return d


@router.post("/", response_model=DriverRead, status_code=201)
def create(payload: DriverCreate, db: Session = Depends(get_db)):
    d = models.Driver(**payload.model_dump())
    db.add(d)
    db.commit()
    db.refresh(d)
    return d


@router.get("/", response_model=list[DriverRead])
def list_all(include_inactive: bool = False, db: Session = Depends(get_db)):
    query = db.query(models.Driver)
    if not include_inactive:
        query = query.filter(models.Driver.active.is_(True))
    return query.order_by(models.Driver.name).all()


@router.get("/{driver_id}", response_model=DriverRead)
def get_one(driver_id: str, db: Session = Depends(get_db)):
    return get_driver_or_404(db, driver_id)


@router.get("/{driver_id}/info", response_model=DriverInfo)
def get_info(driver_id: str, db: Session = Depends(get_db)):
    return get_driver_or_404(db, driver_id)


@router.put("/{driver_id}", response_model=DriverRead)
def update(driver_id: str, payload: DriverUpdate, db: Session = Depends(get_db)):
    d = get_driver_or_404(db, driver_id)
    for key, value in payload.model_dump().items():
        if key == "active" and value is None:
            continue
        setattr(d, key, value)
    db.commit()
    db.refresh(d)
    return d


@router.delete("/{driver_id}")
def delete(driver_id: str, db: Session = Depends(get_db)):
    d = get_driver_or_404(db, driver_id)
    d.active = False
    db.commit()
    return {"status": "deleted"}
