"""FastAPI application entry point"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from powerfolio.core.config import settings
from powerfolio.core.exceptions import PortfolioException
from powerfolio.core.logging_config import setup_logging
from powerfolio.core.security import TokenConfig, TokenService
from powerfolio.api.v1 import admin, auth, projects, users
from powerfolio.database import init_db, close_db
import uvicorn

# Set up logging
logger = setup_logging("powerfolio.main", log_file="app.log")

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Portfolio sharing platform with admin moderation",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Signing configuration is fixed for the lifetime of the process
app.state.token_service = TokenService(TokenConfig.from_settings(settings))

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)
app.include_router(projects.router, prefix=settings.API_PREFIX)
app.include_router(admin.router, prefix=settings.API_PREFIX)


def _error(status_code: int, message: str, headers=None, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
        headers=headers
    )


@app.exception_handler(PortfolioException)
async def portfolio_exception_handler(request: Request, exc: PortfolioException):
    """Handle custom PowerFolio exceptions"""
    logger.warning(f"PowerFolio exception: {exc.detail} - Path: {request.url.path}")
    errors = getattr(exc, "errors", None)
    extra = {"errors": errors} if errors else {}
    return _error(exc.status_code, exc.detail, headers=exc.headers, **extra)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Give framework-raised HTTP errors the same body shape"""
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed input is a 400 with field-level context"""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "invalid"),
        }
        for err in exc.errors()
    ]
    logger.info(f"Validation failed on {request.url.path}: {errors}")
    return _error(400, "Please provide all required fields", errors=errors)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return _error(500, "Internal Server Error")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    logger.info("Starting PowerFolio API...")
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        raise


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Close database connections on shutdown"""
    logger.info("Shutting down PowerFolio API...")
    await close_db()


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "PowerFolio API is running",
        "version": "0.1.0",
        "docs": "/docs"
    }


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run(
        "powerfolio.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
