# app/schemas/product.py
from datetime import datetime
from pydantic import BaseModel, Field, HttpUrl
from app.schemas.common import Money

class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    price: Money = Field(gt=0, max_digits=10, decimal_places=2)
    download_url: HttpUrl | None = None

class DigitalProduct(BaseModel):
    id: int
    name: str
    description: str | None
    price: Money
    download_url: str | None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
