# app/routers/v1/endpoints/products.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.dependencies import get_db
from app.schemas.product import DigitalProduct, ProductCreate
from app.services import product as product_service

router = APIRouter()


@router.get("/products", response_model=List[DigitalProduct])
def get_products(db: Session = Depends(get_db)):
    return product_service.list_products(db)


@router.post("/products", response_model=DigitalProduct, status_code=status.HTTP_201_CREATED)
def create_product(product_in: ProductCreate, db: Session = Depends(get_db)):
    return product_service.create_product(db, product_in)
