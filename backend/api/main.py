"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload --port 4000
"""
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import weather
from services.locations import close_default_location_service
from settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /_healthz",
    "GET /api/geocode?q=cityname",
    "GET /api/locations?q=partialname",
    "GET /api/reverse-geocode?lat=value&lon=value",
    "GET /api/weather?lat=value&lon=value",
    "GET /api/search?q=cityname-or-coordinates",
]

_started_at = time.monotonic()

# Create app
app = FastAPI(
    title="Weather API",
    description="Geocoding, location suggestions and forecast proxy for the weather UI",
    version="0.1.0",
)

# CORS middleware for frontend; "*" in FRONTEND_URL opens it to every origin
allow_all = "*" in settings.ALLOWED_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else settings.ALLOWED_ORIGINS,
    allow_credentials=not allow_all,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(weather.router, prefix="/api", tags=["weather"])


@app.middleware("http")
async def request_log_middleware(request: Request, call_next):
    """Log every inbound request."""
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes list what is available; other HTTP errors keep FastAPI's shape."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"error": "Route not found", "availableEndpoints": AVAILABLE_ENDPOINTS},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.on_event("shutdown")
def shutdown_event():
    """Close the shared provider session."""
    close_default_location_service()


@app.get("/")
async def root():
    """Service banner."""
    return {
        "ok": True,
        "message": "Weather API backend is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "availableEndpoints": AVAILABLE_ENDPOINTS,
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/_healthz")
async def healthz():
    """Liveness probe with process uptime."""
    return {"status": "ok", "uptime": time.monotonic() - _started_at}
