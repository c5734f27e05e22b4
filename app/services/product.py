# app/services/product.py
import logging
from sqlalchemy.orm import Session
from app.crud import product as crud_product
from app.models.product import DigitalProduct
from app.schemas.product import ProductCreate

logger = logging.getLogger(__name__)

def create_product(db: Session, product_in: ProductCreate) -> DigitalProduct:
    product = crud_product.create_product(
        db,
        name=product_in.name,
        price=product_in.price,
        description=product_in.description,
        download_url=str(product_in.download_url) if product_in.download_url else None,
    )
    logger.info(f"Digital product {product.id} '{product.name}' created.")
    return product

def list_products(db: Session) -> list[DigitalProduct]:
    """Только активные продукты."""
    return crud_product.get_active_products(db)
