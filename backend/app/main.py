import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.db.base import Base
from app.db.session import SessionLocal, engine

# Import all models so SQLAlchemy can discover them for table creation
from app.models import Activity, Application, Candidate, Interview, Job, User  # noqa: F401

# Import API router
from app.api.api import api_router

logger = logging.getLogger("app")


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create database tables on startup."""
    configure_logging()
    Base.metadata.create_all(bind=engine)

    if settings.SEED_DEMO_DATA:
        from app.db.seed import seed_demo_data
        from app.storage import DatabaseStorage

        db = SessionLocal()
        try:
            seed_demo_data(DatabaseStorage(db))
        finally:
            db.close()

    logger.info(f"{settings.APP_NAME} API ready at {settings.API_PREFIX}")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Recruitment tracking: jobs, candidates, applications, interviews and pipeline analytics",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Schema violations become 400 with the field-level error list."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


app.include_router(api_router, prefix=settings.API_PREFIX)
