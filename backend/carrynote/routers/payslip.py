import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models
from ..database import get_db
from ..domain.payslip import DeductionSet, PayslipResult, WorkDetailEntry
from ..errors import ValidationError
from ..payroll.calculator import calculate_payslip
from ..payroll.document import build_payslip_document
from ..schemas.payslip import (
    DeductionInput,
    PayslipCreate,
    PayslipDocument,
    PayslipPreview,
    PayslipPreviewRequest,
    PayslipRead,
    WorkDetailInput,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def find_driver(db: Session, driver_id: str | None, driver_name: str | None) -> models.Driver | None:
    """Look up a registered driver by id, falling back to an exact name match."""
    if driver_id:
        driver = db.get(models.Driver, driver_id)
        if not driver:
            raise HTTPException(status_code=404, detail="Driver not found")
        return driver
    if driver_name:
        return (
            db.query(models.Driver)
            .filter(models.Driver.name == driver_name, models.Driver.active.is_(True))
            .first()
        )
    return None


def resolve_deductions(payload: DeductionInput, driver: models.Driver | None) -> DeductionSet:
    # 保険料・リース代は未入力ならドライバー登録値を使う
    insurance_fee = payload.insurance_fee
    if insurance_fee is None:
        insurance_fee = driver.insurance_fee if driver else 0
    vehicle_lease_fee = payload.vehicle_lease_fee
    if vehicle_lease_fee is None:
        vehicle_lease_fee = driver.vehicle_lease_fee if driver else 0

    return DeductionSet(
        transfer_fee=payload.transfer_fee,
        insurance_fee=insurance_fee,
        vehicle_lease_fee=vehicle_lease_fee,
        advance_payment=payload.advance_payment,
        other_deduction_name=payload.other_deduction_name.strip(),
        other_deductions=payload.other_deductions,
    )


def resolve_work_details(db: Session, details: list[WorkDetailInput]) -> list[WorkDetailEntry]:
    """Snapshot the delivery type name and unit price for each row.

    Rows left empty on the form (quantity 0) are skipped when they have no
    usable delivery type, since submission drops them anyway.
    """
    entries: list[WorkDetailEntry] = []
    for d in details:
        if d.delivery_type_id:
            t = db.get(models.DeliveryType, d.delivery_type_id)
            if not t:
                if d.quantity == 0:
                    continue
                raise HTTPException(
                    status_code=400, detail=f"Unknown delivery type: {d.delivery_type_id}"
                )
            name = t.name
            unit_price = d.unit_price if d.unit_price is not None else t.unit_price
        elif d.delivery_type_name and d.unit_price is not None:
            name, unit_price = d.delivery_type_name, d.unit_price
        elif d.quantity == 0:
            # 未選択の空行
            continue
        else:
            raise HTTPException(
                status_code=400,
                detail="Each work detail needs a delivery_type_id or a name and unit_price",
            )
        entries.append(
            WorkDetailEntry(
                delivery_type_id=d.delivery_type_id,
                delivery_type_name=name,
                quantity=d.quantity,
                unit_price=unit_price,
            )
        )
    return entries


def _figures(result: PayslipResult) -> dict:
    ded = result.deductions
    return dict(
        transfer_fee=ded.transfer_fee,
        insurance_fee=ded.insurance_fee,
        vehicle_lease_fee=ded.vehicle_lease_fee,
        advance_payment=ded.advance_payment,
        other_deduction_name=ded.other_deduction_name or None,
        other_deductions=ded.other_deductions,
        subtotal=result.subtotal,
        consumption_tax=result.consumption_tax,
        work_total=result.work_total,
        total_deductions=result.total_deductions,
        net_pay=result.net_pay,
    )


def get_payslip_or_404(db: Session, payslip_id: str) -> models.Payslip:
    p = db.get(models.Payslip, payslip_id)
    if not p:
        raise HTTPException(status_code=404, detail="Not found")
    return p


@router.post("/preview", response_model=PayslipPreview)
def preview(payload: PayslipPreviewRequest, db: Session = Depends(get_db)):
    driver = find_driver(db, payload.driver_id, payload.driver_name)
    entries = resolve_work_details(db, payload.work_details)
    result = calculate_payslip(entries, resolve_deductions(payload, driver), preview=True)
    return PayslipPreview(
        work_details=[line.model_dump() for line in result.lines],
        **_figures(result),
    )


@router.post("/save", response_model=PayslipRead)
def save(payload: PayslipCreate, db: Session = Depends(get_db)):
    driver = find_driver(db, payload.driver_id, payload.driver_name)
    entries = resolve_work_details(db, payload.work_details)
    try:
        result = calculate_payslip(entries, resolve_deductions(payload, driver))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    p = models.Payslip(
        # フリー入力のドライバーには新しい ID を振る
        driver_id=driver.id if driver else models.generate_id(),
        driver_name=driver.name if driver else payload.driver_name,
        company_name=payload.company_name,
        center_name=payload.center_name,
        year=payload.year,
        month=payload.month,
        period_start=payload.period_start,
        period_end=payload.period_end,
        notes=payload.notes,
        **_figures(result),
    )
    for position, line in enumerate(result.lines):
        p.work_details.append(
            models.PayslipWorkDetail(position=position, **line.model_dump())
        )
    db.add(p)
    db.commit()
    db.refresh(p)
    logger.info(
        "Saved payslip %s for %s %d-%02d net=%d", p.id, p.driver_id, p.year, p.month, p.net_pay
    )
    return p


@router.get("/", response_model=list[PayslipRead])
def list_all(
    driver_id: str | None = None,
    year: int | None = None,
    month: int | None = None,
    db: Session = Depends(get_db),
):
    query = db.query(models.Payslip)
    if driver_id:
        query = query.filter(models.Payslip.driver_id == driver_id)
    if year:
        query = query.filter(models.Payslip.year == year)
    if month:
        query = query.filter(models.Payslip.month == month)
    return query.order_by(
        models.Payslip.year.desc(),
        models.Payslip.month.desc(),
        models.Payslip.created_at.desc(),
    ).all()


@router.get("/driver/{driver_id}", response_model=list[PayslipRead])
def list_for_driver(driver_id: str, db: Session = Depends(get_db)):
    if not db.get(models.Driver, driver_id):
        raise HTTPException(status_code=404, detail="Driver not found")
    return list_all(driver_id=driver_id, db=db)


@router.get("/{payslip_id}", response_model=PayslipRead)
def get_one(payslip_id: str, db: Session = Depends(get_db)):
    return get_payslip_or_404(db, payslip_id)


@router.get("/{payslip_id}/document", response_model=PayslipDocument)
def get_document(payslip_id: str, db: Session = Depends(get_db)):
    return build_payslip_document(get_payslip_or_404(db, payslip_id))


@router.delete("/{payslip_id}")
def delete_payslip(payslip_id: str, db: Session = Depends(get_db)):
    p = get_payslip_or_404(db, payslip_id)
    db.delete(p)
    db.commit()
    return {"status": "deleted"}
