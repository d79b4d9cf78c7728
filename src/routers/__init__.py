from fastapi import APIRouter

# Aggregate sub-routers for the main.py include
from .routes_resolve import router as resolve_router
from .routes_caches import router as caches_router

router = APIRouter()
router.include_router(resolve_router)
router.include_router(caches_router)
