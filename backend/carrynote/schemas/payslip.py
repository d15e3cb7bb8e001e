import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class WorkDetailInput(BaseModel):
    delivery_type_id: Optional[str] = None
    delivery_type_name: Optional[str] = None
    quantity: int = Field(0, ge=0)
    # 送信時点の単価。省略時は配送タイプの現在の単価を使う
    unit_price: Optional[int] = Field(None, ge=0)


class DeductionInput(BaseModel):
    transfer_fee: int = Field(0, ge=0)
    # None means "use the driver's registered amount"
    insurance_fee: Optional[int] = Field(None, ge=0)
    vehicle_lease_fee: Optional[int] = Field(None, ge=0)
    advance_payment: int = Field(0, ge=0)
    other_deduction_name: str = ""
    other_deductions: int = Field(0, ge=0)


class PayslipPreviewRequest(DeductionInput):
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    work_details: List[WorkDetailInput] = []


class PayslipCreate(PayslipPreviewRequest):
    driver_name: str = Field(min_length=1)
    company_name: Optional[str] = None
    center_name: Optional[str] = None
    year: int = Field(ge=2000, le=9999)
    month: int = Field(ge=1, le=12)
    period_start: Optional[datetime.date] = None
    period_end: Optional[datetime.date] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _check_period(self):
        if self.period_start and self.period_end and self.period_start > self.period_end:
            raise ValueError("period_start must not be after period_end")
        return self


class WorkDetailRead(BaseModel):
    delivery_type_id: Optional[str] = None
    delivery_type_name: str
    quantity: int
    unit_price: int
    amount: int

    model_config = {
        "from_attributes": True,
    }


class PayslipFigures(BaseModel):
    transfer_fee: int
    insurance_fee: int
    vehicle_lease_fee: int
    advance_payment: int
    other_deduction_name: Optional[str] = None
    other_deductions: int
    subtotal: int
    consumption_tax: int
    work_total: int
    total_deductions: int
    net_pay: int
    work_details: List[WorkDetailRead] = []


class PayslipPreview(PayslipFigures):
    pass


class PayslipRead(PayslipFigures):
    id: str
    driver_id: str
    driver_name: str
    company_name: Optional[str] = None
    center_name: Optional[str] = None
    year: int
    month: int
    period_start: Optional[datetime.date] = None
    period_end: Optional[datetime.date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime.datetime] = None

    model_config = {
        "from_attributes": True,
    }


class DocumentLine(BaseModel):
    name: str
    quantity: int
    unit_price: str
    amount: str


class DocumentDeduction(BaseModel):
    label: str
    amount: str


class PayslipDocument(BaseModel):
    """Figures and labels handed to the PDF / e-mail renderer."""

    file_name: str
    title: str
    driver_name: str
    company_name: Optional[str] = None
    center_name: Optional[str] = None
    period_label: str
    period_range: Optional[str] = None
    lines: List[DocumentLine] = []
    subtotal: str
    consumption_tax: str
    work_total: str
    deductions: List[DocumentDeduction] = []
    total_deductions: str
    net_pay: str
    notes: Optional[str] = None
