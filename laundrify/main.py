import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from laundrify.config import settings
from laundrify.database import engine
from laundrify.presentation.api import router as api_router
from laundrify.presentation.webhooks import router as webhooks_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    logger.info("Laundrify owner service started")
    yield
    if engine is not None:
        await engine.dispose()
    logger.info("Laundrify owner service stopped")


app = FastAPI(
    title="Laundrify Owner Service",
    description="Order lifecycle, payment webhook and shop settings for laundry owners",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(api_router, prefix="/api")
app.include_router(webhooks_router)


@app.get("/health")
async def health():
    return {"status": "healthy"}
