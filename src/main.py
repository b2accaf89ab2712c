from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from uvicorn import run

from routers import prefix_router
from settings import get_settings
from utils.logger import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configure logging and report the settings for the application lifespan.

    :param app: The FastAPI application instance.

    :yields: ``None``
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    settings.log_startup_config()
    try:
        yield
    finally:
        logger.info(f"Shutting down {app.title}")


app = FastAPI(lifespan=lifespan, title=get_settings().app_title, version="0.1.0")
app.include_router(prefix_router)


if __name__ == "__main__":
    settings = get_settings()
    logger.info("Starting server...")
    run(app, host=settings.api_host, port=settings.api_port, reload=False, workers=1)
