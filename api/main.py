"""
FastAPI application for the Recipe Sniper API.

This module wires the REST API together:
- /api/recipes: Scrape, list, search, get and delete recipes (api/routers/recipes.py)
- /api/shopping-lists: Build, edit, extend and delete shopping lists (api/routers/shopping_lists.py)
- GET /health: Health check for monitoring and the Streamlit sidebar
- GET /: API information

Every error response has the body {"error": "<message>"}; request validation
failures are reported as 400.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import configure_logging, get_config_summary
from api.routers import recipes, shopping_lists
from sniper import db

configure_logging()
logger = logging.getLogger(__name__)

API_NAME = "Recipe Sniper API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Scrape recipes from the web and turn them into editable shopping lists"

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

app = FastAPI(
    title=API_NAME,
    description=API_DESCRIPTION,
    version=API_VERSION,
    openapi_tags=[
        {
            "name": "recipes",
            "description": "Add recipes by URL, browse and search them.",
        },
        {
            "name": "shopping-lists",
            "description": "Combine recipes into shopping lists and edit their items.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)

db.init_db()

app.include_router(recipes.router)
app.include_router(shopping_lists.router)


def format_validation_error(exc: RequestValidationError) -> str:
    """
    Reduce pydantic validation errors to one readable line.

    Example:
        "recipeIds: List should have at least 1 item after validation, not 0"
    """
    parts = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException as {"error": detail}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 {"error": ...}."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": format_validation_error(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and return a generic 500 body."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime information and whether
        the database answered a trivial query. Always returns 200 OK if the
        endpoint is reachable.
    """
    uptime_seconds = int(time.time() - _APP_START_TIME)

    database_ok = False
    try:
        with db.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        database_ok = True
    except Exception as e:
        logger.warning(f"Health check database query failed: {e}")

    return {
        "status": "ok",
        "name": API_NAME,
        "version": API_VERSION,
        "uptime_seconds": uptime_seconds,
        "database": database_ok,
        "config": get_config_summary(),
    }


@app.get("/")
def root():
    """
    Root endpoint providing API information.

    Returns:
        Dictionary with API name and version
    """
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "docs": "/docs",
    }
