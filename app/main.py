# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from app.data.database import Base, engine
from app.api import api_router
from app.utils.logging import get_logger
import uvicorn

# IMPORT WSZYSTKICH MODELI NA POCZĄTKU (PRZED JAKIMKOLWIEK CREATE_ALL)
from app.data import models  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="MarketHub Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
