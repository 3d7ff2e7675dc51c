"""
InternMatch - Main Application

FastAPI backend with:
- PostgreSQL for profiles, jobs and reference data
- MongoDB for the translation cache
- An OpenAI-compatible completion service for match ranking and translation
- JWT authentication

Run: uvicorn internmatch.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from internmatch.api.routes import api_router
from internmatch.db.mongodb import init_mongo_indexes, test_mongo_connection
from internmatch.db.postgres import test_postgres_connection
from internmatch.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="InternMatch",
    description="""
    Internship and language-exchange matchmaking.

    ## Features
    - **Authentication**: JWT-based auth for students and businesses
    - **Jobs**: Search open internships by text, skills and languages
    - **Matching**: AI-ranked job matches with a deterministic fallback
    - **Translation**: Chat message translation that never loses the original text
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    if not settings.translation_cache_enabled:
        return
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected",
        "completion_service": "configured" if settings.ai_api_key else "not configured",
    }
