from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from portfolio.core.config import settings
from portfolio.core.envelope import envelope_response
from portfolio.core.errors import PortfolioError
from portfolio.db.engine import check_db_connection, init_db
import logging
import time

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        if settings.DB_AUTO_INIT_ON_STARTUP:
            logger.info("Initializing Database...")
            await init_db()
            logger.info("Database initialized successfully.")
        else:
            await check_db_connection()
            logger.info("Database connection verified.")
    except Exception as e:
        logger.exception(f"Startup Failure: {e}")
        raise
    yield
    logger.info("Shutting down...")

from portfolio.routers import (
    analytics, auth, certificates, dashboard, education, profile, projects, skills
)

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > 0.5:
        logger.warning(f"Slow Request: {request.method} {request.url.path} took {process_time:.4f}s")

    return response


@app.exception_handler(PortfolioError)
async def handle_portfolio_error(request: Request, exc: PortfolioError):
    return envelope_response(False, error=exc.message, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return envelope_response(False, error=message, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return envelope_response(False, error=str(exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"API Error on {request.method} {request.url.path}: {exc}")
    return envelope_response(False, error="An unexpected error occurred", status_code=500)


routers = (analytics, auth, certificates, dashboard, education, profile, projects, skills)

for module in routers:
    app.include_router(module.router, prefix=settings.API_PREFIX)
# Compatibility alias: the same endpoints without the /api prefix.
for module in routers:
    app.include_router(module.router, include_in_schema=False)
