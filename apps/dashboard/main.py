import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from .settings import settings
from .db import pool
from .routes.invoices import router as invoices_router
from .routes.customers import router as customers_router
from .routes.health import router as health_router
from .services.view_cache import get_view_cache

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    pool.open()
    try:
        yield
    finally:
        pool.close()
        get_view_cache().close()


app = FastAPI(
    title="Invoice Dashboard API",
    version="0.1.0",
    description="Create, update and delete invoices from dashboard form posts.",
    lifespan=lifespan,
)

app.include_router(invoices_router)
app.include_router(customers_router)
app.include_router(health_router)
