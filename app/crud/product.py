# app/crud/product.py
from decimal import Decimal
from sqlalchemy.orm import Session
from app.models.product import DigitalProduct

def create_product(
    db: Session,
    name: str,
    price: Decimal,
    description: str | None = None,
    download_url: str | None = None,
) -> DigitalProduct:
    db_product = DigitalProduct(
        name=name,
        description=description,
        price=price,
        download_url=download_url,
        is_active=True,
    )
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product

def get_active_products(db: Session) -> list[DigitalProduct]:
    return db.query(DigitalProduct).filter(DigitalProduct.is_active == True).order_by(DigitalProduct.id).all()
