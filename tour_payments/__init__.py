from contextlib import asynccontextmanager

from fastapi import FastAPI
from tour_payments.api.router import api_router
from tour_payments.core.config import Config
from tour_payments.core.exception_handlers import register_exception_handlers
from tour_payments.core.middlewares import register_middleware
from tour_payments.db.main import init_db


version = "v1"

description = """
A REST API for tour booking payment plans: payment terms, installment
schedules, guest onboarding and bank-transfer reconciliation.
    """

version_prefix =f"/api/{version}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if Config.DB_AUTO_CREATE:
        await init_db()
    yield


app = FastAPI(
    title="tour-payments-service",
    description=description,
    version=version,
    license_info={"name": "MIT License", "url": "https://opensource.org/license/mit"},
    openapi_url=f"{version_prefix}/openapi.json",
    docs_url=f"{version_prefix}/docs",
    redoc_url=f"{version_prefix}/redoc",
    lifespan=lifespan,
)

register_exception_handlers(app)


register_middleware(app)


app.include_router(api_router, prefix=f"{version_prefix}")
