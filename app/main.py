import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core import config
from app.core.errors import register_exception_handlers
from app.core.logging_config import setup_logging, sanitize_log_data
from app.api.routes import auth, ai, roadmaps, system
from app.db.migrate import run_migrations


setup_logging(config.LOG_LEVEL, config.LOG_DIR)
logger = logging.getLogger(__name__)

if config.RUN_MIGRATIONS:
    run_migrations()


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="CareerBridge API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)

register_exception_handlers(app)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(ai.router)
app.include_router(roadmaps.router)
app.include_router(system.router)

logger.info("CareerBridge API configured: %s", sanitize_log_data({
    "database_url": config.DATABASE_URL,
    "gemini_api_key": config.GEMINI_API_KEY,
    "gemini_model": config.GEMINI_MODEL,
    "groq_api_key": config.GROQ_API_KEY,
    "groq_model": config.GROQ_MODEL,
    "ai_timeout_seconds": config.AI_TIMEOUT_SECONDS,
    "ai_max_retries": config.AI_MAX_RETRIES,
}))


@app.get("/")
def root():
    return {"status": "CareerBridge API running"}
