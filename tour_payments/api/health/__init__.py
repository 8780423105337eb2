from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from tour_payments.core.config import Config
from tour_payments.db.main import async_engine
import psutil
import shutil
import asyncio


GB = 1024 ** 3


async def check_database(timeout: float = 2):
    try:
        async with asyncio.timeout(timeout):
            async with async_engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        return "up"
    except (asyncio.TimeoutError, OSError, SQLAlchemyError):
        return "down"


def check_evidence_storage():
    # presigned links need a bucket and a region; no network call is made
    if Config.S3_BUCKET and Config.AWS_REGION:
        return "configured"
    return "missing"


def check_disk(path: str = "/"):
    usage = shutil.disk_usage(path)
    return {
        "free_gb": round(usage.free / GB, 2),
        "usage_percent": round(usage.used / usage.total * 100, 2),
    }


def check_memory():
    mem = psutil.virtual_memory()
    return {
        "available_gb": round(mem.available / GB, 2),
        "usage_percent": mem.percent,
    }
