from typing import Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class WorkDetailEntry(BaseModel):
    """A work-detail row as entered, before the amount is computed."""

    delivery_type_id: Optional[str] = None
    delivery_type_name: str = ""
    quantity: int = Field(0, ge=0)
    unit_price: int = Field(0, ge=0)


class WorkDetailLine(BaseModel):
    model_config = {"frozen": True, "from_attributes": True}

    delivery_type_id: Optional[str] = None
    delivery_type_name: str
    quantity: int = Field(ge=0)
    unit_price: int = Field(ge=0)
    amount: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_amount(self):
        if self.amount != self.quantity * self.unit_price:
            raise ValueError("amount must equal quantity * unit_price")
        return self

    @classmethod
    def from_entry(cls, entry: WorkDetailEntry) -> "WorkDetailLine":
        return cls(
            delivery_type_id=entry.delivery_type_id,
            delivery_type_name=entry.delivery_type_name,
            quantity=entry.quantity,
            unit_price=entry.unit_price,
            amount=entry.quantity * entry.unit_price,
        )


class DeductionSet(BaseModel):
    model_config = {"frozen": True}

    transfer_fee: int = Field(0, ge=0)
    insurance_fee: int = Field(0, ge=0)
    vehicle_lease_fee: int = Field(0, ge=0)
    advance_payment: int = Field(0, ge=0)
    other_deduction_name: str = ""
    other_deductions: int = Field(0, ge=0)

    @property
    def total(self) -> int:
        return (
            self.transfer_fee
            + self.insurance_fee
            + self.vehicle_lease_fee
            + self.advance_payment
            + self.other_deductions
        )


class PayslipResult(BaseModel):
    model_config = {"frozen": True}

    lines: Tuple[WorkDetailLine, ...] = ()
    deductions: DeductionSet = Field(default_factory=DeductionSet)
    subtotal: int = 0
    consumption_tax: int = 0
    work_total: int = 0
    total_deductions: int = 0
    # 差引支給額。マイナスもそのまま保持する
    net_pay: int = 0
