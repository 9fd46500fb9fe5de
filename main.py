from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from clinical_intake.config.database import Database
from clinical_intake.config.settings import settings
from clinical_intake.api.routes import router as intake_router
from clinical_intake.knowledge.registry import get_zone_registry
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting Clinical Intake Service...")
    logger.info(f"Environment: {settings.environment}")

    registry = get_zone_registry()
    problems = registry.validate()
    if problems:
        logger.warning(f"Zone knowledge base has {len(problems)} integrity problems")
    logger.info(f"Zone knowledge base loaded: {len(registry)} zones")

    if settings.session_store == "mongo":
        try:
            Database.connect_db()
            logger.info("MongoDB connected successfully")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    yield

    # Shutdown
    logger.info("Shutting down Clinical Intake Service...")
    if settings.session_store == "mongo":
        Database.close_db()
        logger.info("MongoDB connection closed")


# Initialize FastAPI app
app = FastAPI(
    title="Clinical Intake",
    description="Clinical intake and triage engine: anatomical body-zone knowledge base, pain pattern recognition, adaptive questioning and intake orchestration.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(intake_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    if settings.session_store == "mongo":
        try:
            Database.get_database().command("ping")
            mongodb_status = "connected"
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            mongodb_status = f"error: {str(e)}"
    else:
        mongodb_status = "not used"

    return {
        "status": "ok",
        "service": settings.service_name,
        "version": "1.0.0",
        "dependencies": {
            "mongodb": mongodb_status,
            "session_store": settings.session_store,
        },
        "zones": len(get_zone_registry()),
    }


@app.get("/")
async def root():
    return {
        "message": "Clinical Intake Service",
        "description": "Body-map driven clinical intake, red flag detection and triage",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.intake_port,
        reload=settings.environment == "development",
    )
