"""
Partner Rating Platform API
partner_rating/main.py
"""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from partner_rating.config import settings
from partner_rating.core.errors import (
    answer_validation_handler,
    http_exception_handler,
    repository_exception_handler,
    validation_exception_handler,
)
from partner_rating.core.exceptions import AnswerValidationError, RepositoryException
from partner_rating.core.logging import configure_logging

# IMPORT ROUTERS
from partner_rating.routers.admin import router as admin_router
from partner_rating.routers.dashboard import router as dashboard_router
from partner_rating.routers.evaluations import router as evaluations_router
from partner_rating.routers.health import router as health_router
from partner_rating.routers.partners import router as partners_router
from partner_rating.routers.scoring import router as scoring_router
from partner_rating.routers.users import router as users_router

load_dotenv()
configure_logging()

logger = logging.getLogger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Scoring"},
    {"name": "Users"},
    {"name": "Partners"},
    {"name": "Evaluations"},
    {"name": "Dashboard"},
    {"name": "Admin"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AnswerValidationError, answer_validation_handler)
app.add_exception_handler(RepositoryException, repository_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS)
app.include_router(health_router)
app.include_router(scoring_router)
app.include_router(users_router)
app.include_router(partners_router)
app.include_router(evaluations_router)
app.include_router(dashboard_router)
app.include_router(admin_router)


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "status": "running",
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    logger.info("Starting %s %s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "partner_rating.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
