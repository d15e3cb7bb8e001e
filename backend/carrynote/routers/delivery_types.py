from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models
from ..database import get_db
from ..domain.delivery_type import DeliveryType
from ..schemas.delivery_type import DeliveryTypeCreate, DeliveryTypeRead, DeliveryTypeUpdate

router = APIRouter()


def active_delivery_types(db: Session) -> list[DeliveryType]:
    """Snapshot of the active registry, in registration order."""
    rows = (
        db.query(models.DeliveryType)
        .filter(models.DeliveryType.active.is_(True))
        .order_by(models.DeliveryType.created_at, models.DeliveryType.name)
        .all()
    )
    return [DeliveryType.model_validate(r) for r in rows]


def get_type_or_404(db: Session, type_id: str) -> models.DeliveryType:
    t = db.get(models.DeliveryType, type_id)
    if not t:
        raise HTTPException(status_code=404, detail="Not found")
    return t


@router.post("/", response_model=DeliveryTypeRead, status_code=201)
def create(payload: DeliveryTypeCreate, db: Session = Depends(get_db)):
    t = models.DeliveryType(name=payload.name.strip(), unit_price=payload.unit_price)
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


@router.get("/", response_model=list[DeliveryTypeRead])
def list_all(include_inactive: bool = False, db: Session = Depends(get_db)):
    query = db.query(models.DeliveryType)
    if not include_inactive:
        query = query.filter(models.DeliveryType.active.is_(True))
    return query.order_by(models.DeliveryType.created_at, models.DeliveryType.name).all()


@router.get("/{type_id}", response_model=DeliveryTypeRead)
def get_one(type_id: str, db: Session = Depends(get_db)):
    return get_type_or_404(db, type_id)


@router.put("/{type_id}", response_model=DeliveryTypeRead)
def update(type_id: str, payload: DeliveryTypeUpdate, db: Session = Depends(get_db)):
    # 単価を変えても保存済みの明細は再計算しない
    t = get_type_or_404(db, type_id)
    t.name = payload.name.strip()
    t.unit_price = payload.unit_price
    if payload.active is not None:
        t.active = payload.active
    db.commit()
    db.refresh(t)
    return t


@router.delete("/{type_id}")
def delete(type_id: str, db: Session = Depends(get_db)):
    t = get_type_or_404(db, type_id)
    t.active = False
    db.commit()
    return {"status": "deleted"}
