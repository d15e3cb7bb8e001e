import datetime

from pydantic import BaseModel


class DailyReportDetailRead(BaseModel):
    delivery_type_id: str
    delivery_type_name: str
    quantity: int
    unit_price: int
    amount: int

    model_config = {
        "from_attributes": True,
    }


class DailyReportRead(BaseModel):
    id: str
    driver_id: str
    driver_name: str
    date: datetime.date
    notes: str | None = None
    source: str
    created_at: datetime.datetime | None = None
    details: list[DailyReportDetailRead] = []

    model_config = {
        "from_attributes": True,
    }
