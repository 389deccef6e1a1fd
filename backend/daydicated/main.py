"""
FastAPI entrypoint for the Daydicated backend application.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from daydicated.core.config import settings
from daydicated.core.exceptions import DaydicatedError
from daydicated.core.logging_config import configure_logging
from daydicated.core.utils import format_error
from daydicated.api.router import api_router
from daydicated.db.session import init_db

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Daydicated API",
    description="Backend API for the daily mood calendar",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(DaydicatedError)
async def daydicated_error_handler(request: Request, exc: DaydicatedError):
    """Errors that escape a route become {"error": message} responses."""
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=format_error(exc.message))


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Daydicated API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
