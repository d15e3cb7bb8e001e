from typing import Iterable

from pydantic import BaseModel, Field


class DeliveryType(BaseModel):
    """Read-only snapshot of a registered delivery type."""

    model_config = {"frozen": True, "from_attributes": True}

    id: str
    name: str
    unit_price: int = Field(0, ge=0)
    active: bool = True


def active_only(types: Iterable[DeliveryType]) -> list[DeliveryType]:
    return [t for t in types if t.active]
