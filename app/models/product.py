# app/models/product.py
from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, func
from app.db.session import Base

class DigitalProduct(Base):
    __tablename__ = "digital_products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2, asdecimal=True), nullable=False)
    download_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, server_default='true')
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
