"""
Tour catalog client tests, served by an httpx mock transport.
"""

from datetime import date
from decimal import Decimal

import httpx
import pytest

from tour_payments.core.exceptions import ExternalServiceError, ResourceNotFound
from tour_payments.utils.catalog_service import fetch_tour_package


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_parses_enveloped_package_with_nested_pricing():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {
                    "id": "pkg-iceland",
                    "name": "Iceland Northern Lights",
                    "pricing": {"original": "1200.00", "discounted": "999.50"},
                    "travelDates": [{"startDate": "2026-06-15", "endDate": "2026-06-22"}],
                },
            },
        )

    async with mock_client(handler) as client:
        package = await fetch_tour_package("pkg-iceland", client=client)

    assert seen == ["/api/v1/tour-packages/pkg-iceland"]
    assert package.name == "Iceland Northern Lights"
    assert package.original_cost == Decimal("1200.00")
    assert package.discounted_cost == Decimal("999.50")
    assert package.travel_date_for(date(2026, 6, 15)).end_date == date(2026, 6, 22)
    assert package.travel_date_for(date(2026, 7, 1)) is None


async def test_parses_flat_package():
    def handler(request):
        return httpx.Response(
            200, json={"tourName": "Lisbon Weekend", "originalCost": 450}
        )

    async with mock_client(handler) as client:
        package = await fetch_tour_package("pkg-lisbon", client=client)

    assert package.id == "pkg-lisbon"
    assert package.discounted_cost is None
    assert package.travel_dates == []


@pytest.mark.parametrize(
    "status_code,error",
    [(404, ResourceNotFound), (500, ExternalServiceError), (401, ExternalServiceError)],
)
async def test_error_statuses(status_code, error):
    async with mock_client(lambda request: httpx.Response(status_code)) as client:
        with pytest.raises(error):
            await fetch_tour_package("pkg-x", client=client)


async def test_unreachable_service():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(ExternalServiceError):
            await fetch_tour_package("pkg-x", client=client)


async def test_incomplete_package():
    async with mock_client(lambda request: httpx.Response(200, json={"id": "pkg-x"})) as client:
        with pytest.raises(ExternalServiceError):
            await fetch_tour_package("pkg-x", client=client)


async def test_non_json_body():
    async with mock_client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(ExternalServiceError):
            await fetch_tour_package("pkg-x", client=client)
