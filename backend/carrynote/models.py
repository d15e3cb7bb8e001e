import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def generate_id() -> str:
    return str(uuid.uuid4())


class Driver(Base):
    __tablename__ = 'drivers'

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    bank_name = Column(String, nullable=True)
    branch_name = Column(String, nullable=True)
    account_type = Column(String, nullable=True)
    account_number = Column(String, nullable=True)
    account_holder = Column(String, nullable=True)
    has_lease = Column(Boolean, default=False, nullable=False)
    insurance_fee = Column(Integer, default=0, nullable=False)
    vehicle_lease_fee = Column(Integer, default=0, nullable=False)
    vehicle_number = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    line_user_id = Column(String, nullable=True, unique=True, index=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    daily_reports = relationship("DailyReport", back_populates="driver")


class DeliveryType(Base):
    __tablename__ = 'delivery_types'

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    unit_price = Column(Integer, default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Payslip(Base):
    __tablename__ = 'payslips'

    id = Column(String(36), primary_key=True, default=generate_id)
    # 未登録ドライバー（フリー入力）も許すため外部キーにはしない
    driver_id = Column(String(36), nullable=False, index=True)
    driver_name = Column(String, nullable=False)
    company_name = Column(String, nullable=True)
    center_name = Column(String, nullable=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    period_start = Column(Date, nullable=True)
    period_end = Column(Date, nullable=True)
    subtotal = Column(Integer, nullable=False)
    consumption_tax = Column(Integer, nullable=False)
    work_total = Column(Integer, nullable=False)
    transfer_fee = Column(Integer, default=0, nullable=False)
    insurance_fee = Column(Integer, default=0, nullable=False)
    vehicle_lease_fee = Column(Integer, default=0, nullable=False)
    advance_payment = Column(Integer, default=0, nullable=False)
    other_deduction_name = Column(String, nullable=True)
    other_deductions = Column(Integer, default=0, nullable=False)
    total_deductions = Column(Integer, nullable=False)
    net_pay = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    work_details = relationship(
        "PayslipWorkDetail",
        back_populates="payslip",
        cascade="all, delete-orphan",
        order_by="PayslipWorkDetail.position",
    )


class PayslipWorkDetail(Base):
    __tablename__ = 'payslip_work_details'

    id = Column(Integer, primary_key=True, index=True)
    payslip_id = Column(String(36), ForeignKey('payslips.id'), nullable=False)
    position = Column(Integer, nullable=False)
    delivery_type_id = Column(String(36), nullable=True)
    delivery_type_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)
    amount = Column(Integer, nullable=False)

    payslip = relationship("Payslip", back_populates="work_details")


class DailyReport(Base):
    __tablename__ = 'daily_reports'

    id = Column(String(36), primary_key=True, default=generate_id)
    driver_id = Column(String(36), ForeignKey('drivers.id'), nullable=False, index=True)
    driver_name = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    source = Column(String, default="line", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    driver = relationship("Driver", back_populates="daily_reports")
    details = relationship(
        "DailyReportDetail",
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="DailyReportDetail.position",
    )


class DailyReportDetail(Base):
    __tablename__ = 'daily_report_details'

    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(String(36), ForeignKey('daily_reports.id'), nullable=False)
    position = Column(Integer, nullable=False)
    delivery_type_id = Column(String(36), nullable=False)
    delivery_type_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)
    amount = Column(Integer, nullable=False)

    report = relationship("DailyReport", back_populates="details")


class ChatMessage(Base):
    __tablename__ = 'chat_messages'

    id = Column(Integer, primary_key=True, index=True)
    # 未登録ドライバーとのやり取りも残すため外部キーにはしない
    driver_id = Column(String(36), nullable=False, index=True)
    text = Column(Text, nullable=False)
    sender = Column(String, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
