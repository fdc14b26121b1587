from fastapi import APIRouter

from verifybot.presentation.routers.interactions import router as interactions_router
from verifybot.presentation.routes.health import router as health_router

api = APIRouter()

# Discord posts to the root URL configured as the interactions endpoint
routers = (interactions_router, health_router)
for router in routers:
    api.include_router(router)
