from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from contextlib import asynccontextmanager
from init_db import init_database
from api import help_requests, articles
from config.app_config import CORS_ORIGINS, HOST, LOG_DIR, LOG_LEVEL, PORT
from constants import HTTPStatus
import logging
from logging.handlers import RotatingFileHandler
import sys

# Configure logging with rotating file handler
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "backend.log"

# Create formatters and handlers
log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# File handler with rotation (10MB per file, keep 5 backups)
file_handler = RotatingFileHandler(
    LOG_FILE,
    maxBytes=10 * 1024 * 1024,  # 10MB
    backupCount=5,
    encoding='utf-8'
)
file_handler.setFormatter(log_formatter)
file_handler.setLevel(LOG_LEVEL)

# Console handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)
console_handler.setLevel(LOG_LEVEL)

# Configure root logger
root_logger = logging.getLogger()
root_logger.setLevel(LOG_LEVEL)
root_logger.addHandler(file_handler)
root_logger.addHandler(console_handler)

logger = logging.getLogger(__name__)
logger.info(f"Logging initialized: {LOG_FILE}")

API_TITLE = "Help Requests API"
API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    logger.info("Initializing database...")
    init_database()
    logger.info(f"{API_TITLE} {API_VERSION} ready")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=API_TITLE,
    description="Neighbourhood help requests: who needs which supplies, where",
    version=API_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 Bad Request."""
    logger.warning(f"{request.method} {request.url.path} - Invalid request: {exc.errors()}")
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Include routers
app.include_router(help_requests.router, tags=["help-requests"])
app.include_router(articles.router, tags=["articles"])


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": API_TITLE,
        "version": API_VERSION
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting {API_TITLE} on http://{HOST}:{PORT}...")
    uvicorn.run(app, host=HOST, port=PORT)
