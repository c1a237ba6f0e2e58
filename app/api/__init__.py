from fastapi import APIRouter

from .pages import router as pages_router
from .status_api import router as status_router
from .vehicles_api import router as vehicles_router

router = APIRouter()
router.include_router(pages_router)
router.include_router(status_router)
router.include_router(vehicles_router)
