# app/schemas/purchase.py
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field
from app.schemas.common import Money

class PurchaseCreate(BaseModel):
    member_id: int
    product_name: str = Field(min_length=1)
    amount: Money = Field(gt=0, max_digits=10, decimal_places=2)

class PurchaseEvent(BaseModel):
    id: int
    member_id: int
    product_name: str
    amount: Money
    status: Literal["pending", "completed", "failed"]
    created_at: datetime

    class Config:
        from_attributes = True
