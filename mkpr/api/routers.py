from fastapi import APIRouter

from mkpr.api.v1.models import router as models_router
from mkpr.api.v1.pr import router as pr_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(pr_router)
api_router.include_router(models_router)
