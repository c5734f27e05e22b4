# app/routers/v1/api.py

from fastapi import APIRouter

from app.routers.v1.endpoints import members, purchases, notifications, products

# Главный роутер для API версии v1
# Все пути, подключенные к нему, будут иметь префикс /api/v1
api_router = APIRouter(prefix="/v1")

api_router.include_router(members.router, tags=["Members"])
api_router.include_router(purchases.router, tags=["Purchases"])
api_router.include_router(notifications.router, tags=["Notifications"])
api_router.include_router(products.router, tags=["Products"])
