import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.router import api_router
from app.config import get_settings
from app.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"Tech Helper backend starting up (provider={settings.llm_provider}, "
        f"model={settings.llm_chat_model})..."
    )
    if not settings.api_key_configured:
        logger.warning("GEMINI_API_KEY is not set; chat requests will fail")
    yield
    logger.info("Tech Helper backend shutting down...")


app = FastAPI(
    title="Hailey Tech Helper",
    description="IT support chat assistant for Hailey Device Repair",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS — allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router)


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc):
    logger.exception("Internal server error")
    return JSONResponse(
        status_code=500,
        content={"error": "An internal error occurred. Please try again later."},
    )
