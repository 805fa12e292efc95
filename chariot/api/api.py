# chariot/api/api.py

from fastapi import APIRouter

from chariot.api.endpoints import monsters, spells

api_router = APIRouter()

api_router.include_router(spells.router, prefix="/spells", tags=["Spells"])
api_router.include_router(monsters.router, prefix="/monsters", tags=["Monsters"])
