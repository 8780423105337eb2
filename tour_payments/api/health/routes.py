from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from tour_payments.api.health import (
    check_database,
    check_disk,
    check_evidence_storage,
    check_memory,
)


class HealthChecks(BaseModel):
    database: Literal["up", "down"]
    evidenceStorage: Literal["configured", "missing"]
    disk: dict
    memory: dict


class HealthReport(BaseModel):
    status: Literal["ok", "degraded"]
    checks: HealthChecks


health_router = APIRouter()


@health_router.get("/", response_model=HealthReport)
async def health_check():
    checks = HealthChecks(
        database=await check_database(),
        evidenceStorage=check_evidence_storage(),
        disk=check_disk(),
        memory=check_memory(),
    )
    # evidence links are optional for booking creation, the database is not
    status = "ok" if checks.database == "up" else "degraded"
    return HealthReport(status=status, checks=checks)
