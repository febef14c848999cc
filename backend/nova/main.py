"""Main FastAPI application entry point"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
import logging

from nova.api.auth import router as auth_router
from nova.api.projects import router as projects_router
from nova.api.scenes import router as scenes_router
from nova.api.scripts import router as scripts_router
from nova.api.budget import router as budget_router
from nova.api.schedule import router as schedule_router
from nova.api.call_sheets import router as call_sheets_router
from nova.api.crew import router as crew_router
from nova.api.notifications import router as notifications_router
from nova.api.websocket_routes import router as websocket_router
from nova.api.health import router as health_router, API_VERSION
from nova.api.errors import create_error_response, service_error_response, validation_error
from nova.services.exceptions import NovaServiceError
from nova.services.redis_service import RedisService
from nova.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await RedisService.close()


app = FastAPI(
    title="Nova Film Production API",
    description="Backend API for film production management: projects, scene breakdown, budget, scheduling and call sheets",
    version=API_VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)


@app.exception_handler(NovaServiceError)
async def service_error_handler(request: Request, exc: NovaServiceError):
    """Domain errors raised by services become problem details"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return service_error_response(exc, instance=request.url.path)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routers raise HTTPException with a ready problem-detail dict"""
    if isinstance(exc.detail, dict):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=getattr(exc, "headers", None),
        )
    return create_error_response(
        status_code=exc.status_code,
        title="Error",
        detail=str(exc.detail),
        instance=request.url.path,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return validation_error(
        detail="Request validation failed",
        errors=errors,
        instance=request.url.path,
    )


# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(scenes_router)
app.include_router(scripts_router)
app.include_router(budget_router)
app.include_router(schedule_router)
app.include_router(call_sheets_router)
app.include_router(crew_router)
app.include_router(notifications_router)
app.include_router(websocket_router)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus scrape endpoint"""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Nova Film Production API",
        "version": API_VERSION,
        "status": "running",
    }
