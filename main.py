"""
Glow Engine - Adaptive Photo Enhancement Recommendation Service
Version: 1.4.0
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config.settings import settings
from core.dependencies import get_profile_catalog
from core.exceptions import (
    ConfigurationException,
    EnhancementEngineException,
    NotFoundException,
    ValidationException,
)
from core.logging import SERVICE_STARTED, logger, log_structured

from api.endpoints.feedback import router as feedback_router
from api.endpoints.profiles import router as profiles_router
from api.endpoints.recommendations import router as recommendations_router
from api.endpoints.users import router as users_router


# ========== Rate Limiter Initialization ==========
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

# ========== Service Startup Status Tracking ==========
startup_status = {
    "profile_catalog": False,
}

# ========== FastAPI App Initialization ==========
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

# Attach limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ========== CORS Middleware ==========
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========== Security Headers Middleware ==========
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """
    Add security headers to all responses

    Headers added:
    - Content-Security-Policy: JSON API, nothing to load
    - X-Frame-Options: Prevent clickjacking
    - X-Content-Type-Options: Prevent MIME sniffing
    - Strict-Transport-Security: Force HTTPS (production only)
    - Referrer-Policy: Control referrer information
    """
    response = await call_next(request)

    response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"

    # HSTS - only in HTTPS/production environments
    if request.url.scheme == "https" or settings.ENVIRONMENT == "production":
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )

    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

    if "Server" in response.headers:
        del response.headers["Server"]

    return response


# ========== Exception Handlers ==========
def _error_response(status_code: int, exc: EnhancementEngineException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    logger.warning(f"⚠️ Rejected input on {request.url.path}: {exc.message}")
    return _error_response(422, exc)


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return _error_response(404, exc)


@app.exception_handler(ConfigurationException)
async def configuration_exception_handler(request: Request, exc: ConfigurationException):
    logger.error(f"❌ Profile configuration error: {exc.message}")
    return _error_response(500, exc)


# ========== Register Routers ==========
app.include_router(profiles_router, prefix="/api", tags=["profiles"])
app.include_router(recommendations_router, prefix="/api", tags=["recommendations"])
app.include_router(feedback_router, prefix="/api", tags=["feedback"])
app.include_router(users_router, prefix="/api", tags=["users"])


# ========== Startup Event ==========
@app.on_event("startup")
async def startup_event():
    """Validate the profile catalog before serving traffic"""
    logger.info("🚀 Starting Glow Engine...")

    # Raises ConfigurationException on a malformed table; fail fast
    catalog = get_profile_catalog()
    startup_status["profile_catalog"] = True

    log_structured(SERVICE_STARTED, {
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "profiles": catalog.names(),
    })
    logger.info(f"✅ Profile catalog ready ({len(catalog)} profiles)")


# ========== Root Endpoint ==========
@app.get("/")
async def root():
    """Root endpoint with service status"""
    return {
        "message": f"{settings.APP_TITLE} - v{settings.APP_VERSION}",
        "version": settings.APP_VERSION,
        "status": "running",
        "features": {
            "adaptive_intensity": "enabled",
            "personalization": "enabled",
            "custom_profiles": "enabled",
            "rate_limiting": "enabled" if settings.RATE_LIMIT_ENABLED else "disabled",
        }
    }


# ========== Health Check Endpoint ==========
@app.get("/api/health")
async def health_check():
    """
    Liveness check

    Returns:
    - status: "healthy" once the catalog is loaded, else "degraded"
    - profiles: number of catalog profiles
    """
    catalog = get_profile_catalog()

    return {
        "status": "healthy" if startup_status["profile_catalog"] else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "profiles": len(catalog),
        "startup": dict(startup_status),
    }


# ========== Main Entry Point ==========
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
