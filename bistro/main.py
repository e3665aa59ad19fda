from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from bistro.core.config import settings
from bistro.core.database import init_models
from bistro.api.v1.routers import chat, bookings

# Registers the ORM models on Base.metadata before init_models runs
from bistro.infrastructure.persistence import models  # noqa: F401

from contextlib import asynccontextmanager
from bistro.core.logging import setup_logging
import logging

# Setup logging
setup_logging()
logger = logging.getLogger("bistro")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting up application...")
    await init_models()
    yield
    # Shutdown
    logger.info("Shutting down application...")

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(chat.router, prefix=f"{settings.API_V1_STR}/chat", tags=["chat"])
app.include_router(bookings.router, prefix=f"{settings.API_V1_STR}/bookings", tags=["bookings"])

@app.get("/health")
def health_check():
    return {"status": "ok"}
