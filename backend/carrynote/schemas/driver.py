from pydantic import BaseModel, Field


class DriverBase(BaseModel):
    name: str = Field(min_length=1)
    phone: str | None = None
    email: str | None = None
    bank_name: str | None = None
    branch_name: str | None = None
    account_type: str | None = None
    account_number: str | None = None
    account_holder: str | None = None
    has_lease: bool = False
    insurance_fee: int = Field(0, ge=0)
    vehicle_lease_fee: int = Field(0, ge=0)
    vehicle_number: str | None = None
    notes: str | None = None


class DriverCreate(DriverBase):
    pass


class DriverUpdate(DriverBase):
    # 省略時は有効/無効を変更しない
    active: bool | None = None


class DriverRead(DriverBase):
    id: str
    line_user_id: str | None = None
    active: bool = True

    model_config = {
        "from_attributes": True,
    }


class DriverInfo(BaseModel):
    """Driver-facing view without bank account details."""

    id: str
    name: str
    phone: str | None = None
    email: str | None = None
    account_type: str | None = None
    account_holder: str | None = None
    has_lease: bool = False
    insurance_fee: int = 0
    vehicle_lease_fee: int = 0
    vehicle_number: str | None = None
    line_user_id: str | None = None

    model_config = {
        "from_attributes": True,
    }
