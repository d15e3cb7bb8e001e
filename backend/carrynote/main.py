import logging

from fastapi import FastAPI

from . import models
from .config import get_settings
from .database import engine
from .routers import chat, daily_reports, delivery_types, drivers, line, payslip

# Ensure application logs show informative messages
logging.basicConfig(
    level=get_settings().log_level,
    format="%(levelname)s:%(name)s:%(message)s"
)

models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Carry Note API")

app.include_router(drivers.router, prefix="/api/drivers", tags=["drivers"])
app.include_router(delivery_types.router, prefix="/api/delivery-types", tags=["delivery-types"])
app.include_router(payslip.router, prefix="/api/payslip", tags=["payslip"])
app.include_router(daily_reports.router, prefix="/api/daily-reports", tags=["daily-reports"])
app.include_router(line.router, prefix="/api/line", tags=["line"])
app.include_router(chat.router, prefix="/api/chat", tags=["chat"])


@app.get("/")
def read_root():
    return {"message": "Carry Note API"}


@app.get("/health")
def health():
    return {"status": "OK"}
