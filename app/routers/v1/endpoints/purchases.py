# app/routers/v1/endpoints/purchases.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.dependencies import get_db
from app.schemas.purchase import PurchaseCreate, PurchaseEvent
from app.services import purchase as purchase_service

router = APIRouter()


@router.post("/purchases", response_model=PurchaseEvent, status_code=status.HTTP_201_CREATED)
async def create_purchase(purchase_in: PurchaseCreate, db: Session = Depends(get_db)):
    """Фиксирует покупку и рассылает уведомления покупателю и его пригласившему."""
    return await purchase_service.record_purchase(
        db, purchase_in.member_id, purchase_in.product_name, purchase_in.amount
    )
