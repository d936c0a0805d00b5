from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db
from app.services.ai_service import AIService, get_ai_service

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/health")
def system_health(
    db: Session = Depends(get_db),
    ai_service: AIService = Depends(get_ai_service)
):
    """Database connectivity and configured AI providers."""
    db_ok = True
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        db_ok = False

    providers = [provider.value for provider in ai_service.available_providers()]
    return {
        "status": "ok" if db_ok else "degraded",
        "database": "connected" if db_ok else "error",
        "ai_providers": providers,
        "api_version": "1.0.0",
        "service": "CareerBridge API"
    }
