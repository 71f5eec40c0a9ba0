from fastapi import APIRouter

from app.core.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("/health")
def health():
    return {
        "ok": True,
        "message": "Visitor Check-In API running",
        "environment": settings.ENVIRONMENT,
    }
