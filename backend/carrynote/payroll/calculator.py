"""Payslip computation.

Amounts are integer yen. The work total is tax-inclusive, so the
consumption tax is only extracted from it for display and never added
to or subtracted from any other figure.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ..domain.payslip import DeductionSet, PayslipResult, WorkDetailEntry, WorkDetailLine
from ..errors import ValidationError

CONSUMPTION_TAX_RATE = Decimal(10)  # percent


def inclusive_consumption_tax(subtotal: int) -> int:
    """Return the 10% consumption tax contained in a tax-inclusive amount.

    ``round(subtotal * 10 / 110)`` with halves rounded away from zero.
    """
    tax = Decimal(subtotal) * CONSUMPTION_TAX_RATE / (100 + CONSUMPTION_TAX_RATE)
    return int(tax.to_integral_value(rounding=ROUND_HALF_UP))


def validate_deductions(deductions: DeductionSet) -> None:
    if deductions.other_deductions > 0 and not deductions.other_deduction_name.strip():
        raise ValidationError("Other deduction name is required when other deductions are entered")


def calculate_payslip(
    entries: Iterable[WorkDetailEntry],
    deductions: DeductionSet,
    preview: bool = False,
) -> PayslipResult:
    """Compute a payslip from work-detail entries and deductions.

    With ``preview=True`` (live calculation while the form is edited) every
    row is kept, zero-quantity rows included, and nothing is validated.
    Otherwise zero-quantity rows are dropped and at least one row must
    remain.
    """
    lines = [WorkDetailLine.from_entry(e) for e in entries]

    if not preview:
        lines = [line for line in lines if line.quantity > 0]
        if not lines:
            raise ValidationError("No work detail entered")
        validate_deductions(deductions)

    subtotal = sum(line.amount for line in lines)
    work_total = subtotal
    total_deductions = deductions.total

    return PayslipResult(
        lines=tuple(lines),
        deductions=deductions,
        subtotal=subtotal,
        consumption_tax=inclusive_consumption_tax(subtotal),
        work_total=work_total,
        total_deductions=total_deductions,
        net_pay=work_total - total_deductions,
    )
