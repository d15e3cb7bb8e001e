from datetime import date
from typing import Optional

from .. import models
from ..schemas.payslip import DocumentDeduction, DocumentLine, PayslipDocument

# 控除項目の表示名（金額が 0 の項目は出力しない）
DEDUCTION_LABELS = (
    ("transfer_fee", "振込手数料"),
    ("insurance_fee", "保険料"),
    ("vehicle_lease_fee", "車両リース代"),
    ("advance_payment", "前借り"),
)


def format_yen(amount: int) -> str:
    """12345 -> '¥12,345', -3000 -> '-¥3,000'"""
    sign = "-" if amount < 0 else ""
    return f"{sign}¥{abs(amount):,}"


def format_slash_date(d: Optional[date]) -> str:
    return d.strftime("%Y/%m/%d") if d else ""


def payslip_file_name(p: models.Payslip) -> str:
    return f"payslip_{p.driver_name}_{p.year}_{p.month}.pdf"


def build_payslip_document(p: models.Payslip) -> PayslipDocument:
    """Build the rendering context for a stored payslip.

    Only stored figures are used, nothing is recomputed.
    """
    deductions = [
        DocumentDeduction(label=label, amount=format_yen(getattr(p, attr) or 0))
        for attr, label in DEDUCTION_LABELS
        if (getattr(p, attr) or 0) > 0
    ]
    if p.other_deduction_name and (p.other_deductions or 0) > 0:
        deductions.append(
            DocumentDeduction(label=p.other_deduction_name, amount=format_yen(p.other_deductions))
        )

    period_range = None
    if p.period_start or p.period_end:
        period_range = f"{format_slash_date(p.period_start)} 〜 {format_slash_date(p.period_end)}"

    return PayslipDocument(
        file_name=payslip_file_name(p),
        title="給料明細書",
        driver_name=p.driver_name,
        company_name=p.company_name,
        center_name=p.center_name,
        period_label=f"{p.year}年{p.month}月",
        period_range=period_range,
        lines=[
            DocumentLine(
                name=d.delivery_type_name,
                quantity=d.quantity,
                unit_price=format_yen(d.unit_price),
                amount=format_yen(d.amount),
            )
            for d in p.work_details
        ],
        subtotal=format_yen(p.subtotal),
        consumption_tax=format_yen(p.consumption_tax),
        work_total=format_yen(p.work_total),
        deductions=deductions,
        total_deductions=format_yen(p.total_deductions),
        net_pay=format_yen(p.net_pay),
        notes=p.notes,
    )
