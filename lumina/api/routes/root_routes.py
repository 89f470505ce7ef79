# lumina/api/routes/root_routes.py
from fastapi import APIRouter, Depends

from lumina.core.config import Settings, get_settings

router = APIRouter()


@router.get("/")
async def read_root():
    return {"message": "Lumina Tarot interpretation service"}


@router.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "generator_configured": bool(settings.GEMINI_API_KEY),
    }
