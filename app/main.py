"""
FastAPI application entry point for RepoHub Dashboard API.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tortoise import Tortoise

from app.config import settings, TORTOISE_ORM
from app.exceptions.register import register_exception_handlers
from app.logging_config import setup_logging
from app.middlewares.trace_id_middleware import TraceIDMiddleware
from app.routes import router as api_router

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    await Tortoise.init(config=TORTOISE_ORM)
    logger.info("Database connection initialized")

    # Generate schemas only for throwaway local databases, migrations own the rest
    if settings.API_ENV == "local":
        await Tortoise.generate_schemas()

    yield

    # Shutdown
    await Tortoise.close_connections()
    logger.info("Database connections closed")


# Initialize FastAPI app
app = FastAPI(
    title="RepoHub Dashboard API",
    description="Backend API service for the repository connection dashboard.",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TraceIDMiddleware)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/", tags=["Health"])
@app.get("/health_check", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "message": "RepoHub Dashboard API is running!",
        "version": settings.VERSION,
    }


if __name__ == "__main__":
    """Run the application with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.API_ENV == "development",
    )
