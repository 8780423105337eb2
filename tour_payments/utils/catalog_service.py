from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated

import httpx
from fastapi import status
from pydantic import BaseModel, Field, ValidationError

from tour_payments.core.config import Config
from tour_payments.core.exceptions import ExternalServiceError, ResourceNotFound
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import logger


class TravelDate(BaseModel):
    start_date: Annotated[date, Field(alias="startDate")]
    end_date: Annotated[date | None, Field(alias="endDate")] = None

    model_config = {"populate_by_name": True}


class TourPackage(BaseModel):
    id: str
    name: str
    original_cost: Annotated[Decimal, Field(alias="originalCost")]
    discounted_cost: Annotated[Decimal | None, Field(alias="discountedCost")] = None
    travel_dates: Annotated[list[TravelDate], Field(alias="travelDates")] = []

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def travel_date_for(self, tour_date: date) -> TravelDate | None:
        for item in self.travel_dates:
            if item.start_date == tour_date:
                return item
        return None


def _unwrap(data) -> dict:
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    if isinstance(data, dict):
        return data
    raise ExternalServiceError("Unexpected tour package response format")


def _normalize_package(raw: dict) -> dict:
    # The catalog nests prices under "pricing"; older payloads keep them flat.
    pricing = raw.get("pricing") if isinstance(raw.get("pricing"), dict) else {}
    return {
        "id": str(raw.get("id") or raw.get("tourPackageId") or ""),
        "name": raw.get("name") or raw.get("tourName"),
        "originalCost": pricing.get("original", raw.get("originalCost")),
        "discountedCost": pricing.get("discounted", raw.get("discountedCost")),
        "travelDates": raw.get("travelDates") or [],
    }


async def fetch_tour_package(
    tour_package_id: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> TourPackage:
    url = f"{Config.CATALOG_SERVICE_URL.rstrip('/')}/api/v1/tour-packages/{tour_package_id}"

    try:
        if client is not None:
            response = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=Config.CATALOG_TIMEOUT_SECONDS) as owned:
                response = await owned.get(url)
    except httpx.HTTPError as exc:
        logger.error(f"Unexpected error tour catalog service: {str(exc)}")
        raise ExternalServiceError("Unable to reach tour catalog service") from exc

    if response.status_code == status.HTTP_404_NOT_FOUND:
        raise ResourceNotFound(ErrorMessage.TOUR_PACKAGE_NOT_FOUND)
    if response.status_code >= status.HTTP_400_BAD_REQUEST:
        raise ExternalServiceError("Tour catalog service returned an error")

    try:
        data = response.json()
    except ValueError as exc:
        raise ExternalServiceError("Invalid tour catalog response") from exc

    try:
        package = TourPackage.model_validate(_normalize_package(_unwrap(data)))
    except ValidationError as exc:
        logger.error(f"Tour package {tour_package_id} failed validation: {exc}")
        raise ExternalServiceError("Tour package data is incomplete") from exc

    if not package.id:
        package.id = tour_package_id
    return package
