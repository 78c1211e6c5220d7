from fastapi import APIRouter
from roster.api import divisions, settings, shifts, people, display, utils, users

api_router = APIRouter()

# Публичные роутеры
api_router.include_router(display.router)
api_router.include_router(utils.router)

# Защищенные роутеры
api_router.include_router(divisions.router)
api_router.include_router(settings.router)
api_router.include_router(shifts.router)
api_router.include_router(people.router)
api_router.include_router(users.router)
