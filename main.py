import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shortlink_app.config import settings
from shortlink_app.database.connection import Database
from shortlink_app.api import links, redirect
from shortlink_app.api.errors import register_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database at startup, release it at shutdown"""
    database = Database(settings.database_url)
    database.connect()
    app.state.database = database
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    try:
        yield
    finally:
        database.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A link shortener with click tracking built with FastAPI",
    debug=settings.debug,
    lifespan=lifespan
)

register_exception_handlers(app)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
# links first: its fixed paths (/all-links, /shorten) must win over /{key}
app.include_router(links.router)
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
