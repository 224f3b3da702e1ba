from fastapi import APIRouter

from ...infrastructure.config.settings import settings
from .routes import router as routes_router

router = APIRouter(prefix=settings.API_PREFIX)
router.include_router(routes_router)
