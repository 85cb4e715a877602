import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.app.config import settings
from api.app.routers.summary import router as summary_router
from spend.ingest.pipeline import pipeline

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await pipeline.receiver.ensure_dir()
    yield

app = FastAPI(lifespan=lifespan, title="Order Spend Summary API", version="0.1.0")

app.include_router(summary_router)

@app.get("/health")
def health():
    return {
        "status": "OK",
        "version": app.version,
        "env": settings.app_env,
    }
