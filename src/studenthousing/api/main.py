"""
FastAPI Main Application

Student Housing Marketplace REST API.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from config.settings import settings
from src.studenthousing import __version__
from src.studenthousing.api.dependencies import get_db
from src.studenthousing.api.errors import register_exception_handlers
from src.studenthousing.api.schemas import HealthCheck
from src.studenthousing.api.routers import auth, listers
from src.studenthousing.db.session import close_connections, health_check as database_health
from src.studenthousing.utils.logger import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("api_starting", version=__version__, environment=settings.environment)
    yield
    close_connections()
    logger.info("api_stopped")


# Create FastAPI app
app = FastAPI(
    title="Student Housing Marketplace API",
    description="REST API for listers and the housing listings they publish for students",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS for the Streamlit client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router)
app.include_router(listers.router)


@app.get("/health", response_model=HealthCheck, tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
        Health status with database connectivity check
    """
    database_status = database_health(db)

    return HealthCheck(
        status="healthy" if database_status == "connected" else "degraded",
        version=__version__,
        database=database_status,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", tags=["root"])
def root():
    """
    Root endpoint.

    Returns:
        API information
    """
    return {
        "name": "Student Housing Marketplace API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "features": [
            "JWT Authentication",
            "Lister Profiles",
            "Embedded Listings",
            "Listings Overview Search",
        ]
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.studenthousing.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
