from pydantic import BaseModel, Field


class DeliveryTypeCreate(BaseModel):
    name: str = Field(min_length=1)
    unit_price: int = Field(0, ge=0)


class DeliveryTypeUpdate(DeliveryTypeCreate):
    active: bool | None = None


class DeliveryTypeRead(DeliveryTypeCreate):
    id: str
    active: bool

    model_config = {
        "from_attributes": True,
    }
