"""
HealthRisk API Server Entry Point
Questionnaire risk scoring with idempotent submissions.

Use this file for deployment:
  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from healthrisk.config import API_VERSION, CORS_ALLOW_ORIGINS, LOG_LEVEL
from healthrisk.api import assessments_router, health_router
from healthrisk.submission import close_record_store

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_record_store()
    logger.info("[SHUTDOWN] Record store closed")


# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="HealthRisk API",
    description="Breast health risk questionnaire scoring and reports",
    version=API_VERSION,
    lifespan=lifespan,
)

# ============================================
# CORS Configuration
# ============================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies use the same error envelope as the guard."""
    return JSONResponse(
        status_code=400,
        content={"ok": False, "code": "VALIDATION", "message": "Request body is not a valid submission"},
    )


app.include_router(assessments_router)
app.include_router(health_router)
logger.info(f"[STARTUP] HealthRisk API v{API_VERSION} routers registered")


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
