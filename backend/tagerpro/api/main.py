from fastapi import APIRouter

from tagerpro.api.routes import ai, analytics, leads, products, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])
