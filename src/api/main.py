"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from datetime import datetime
from urllib.parse import urlparse

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.applications_router import api as applications_api
from src.api.dependencies import api_key_protection, get_config, get_db
from src.api.zoho_reports_router import api as zoho_reports_api
from src.error_handler import ErrorHandler
from src.grants.validation import FormValidationError
from src.utils.config_loader import IntakeConfig

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Belize Fund Grant Intake API",
    description="Grant application intake with Zoho Creator forwarding",
    version="1.0.0",
    dependencies=[Depends(api_key_protection)],  # protect everything by default
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

error_handler = ErrorHandler()


@app.exception_handler(FormValidationError)
async def form_validation_exception_handler(request: Request, exc: FormValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": exc.message,
            "errors": exc.as_list(),
            "field_errors": exc.field_errors,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content=error_handler.handle_exception(exc, context={"path": request.url.path, "method": request.method}),
    )


@app.get("/", tags=["Health"])
async def root():
    return {"service": "Belize Fund Grant Intake API", "status": "healthy", "version": "1.0.0", "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(config: IntakeConfig = Depends(get_config)):
    """Health check with configuration summary (no secrets)."""
    zoho = config.zoho
    return {
        "status": "healthy",
        "database": "postgres" if os.getenv("DATABASE_URL") else "in-memory",
        "zoho": {"configured": bool(zoho.client_id and zoho.refresh_token and zoho.org_id and zoho.app_id)},
        "timestamp": datetime.now().isoformat(),
    }


app.include_router(applications_api, prefix="/api")
app.include_router(zoho_reports_api, prefix="/api")


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("Starting Belize Fund Grant Intake API...")

    # Log sanitized DB target details (no credentials) for connectivity debugging.
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        try:
            parsed = urlparse(db_url)
            logger.info(
                "DATABASE_URL target: scheme=%s host=%s port=%s db=%s",
                parsed.scheme,
                parsed.hostname,
                parsed.port or 5432,
                (parsed.path or "").lstrip("/"),
            )
        except ValueError as e:
            logger.warning("Could not parse DATABASE_URL for startup logging: %s", e)
    else:
        logger.info("DATABASE_URL not set; using in-memory PostgresDB stub")

    # Create database tables if they don't exist
    try:
        get_db().create_tables()
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}")

    get_config()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Belize Fund Grant Intake API...")
