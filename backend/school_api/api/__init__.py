from fastapi import APIRouter

from .routes import router as resources_router
from .users import router as users_router

router = APIRouter()
router.include_router(users_router)
router.include_router(resources_router)

__all__ = ["router"]
