from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from datetime import datetime
from typing import Optional

class OrderStatus(str, Enum):
    placed    = "placed"
    approved  = "approved"
    delivered = "delivered"

class Order(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    pet_id: Optional[int] = Field(None, alias="petId")
    quantity: Optional[int] = Field(None, ge=0)
    ship_date: Optional[datetime] = Field(None, alias="shipDate")
    status: Optional[OrderStatus] = None
    complete: Optional[bool] = None

class OrderCreated(BaseModel):
    id: int
