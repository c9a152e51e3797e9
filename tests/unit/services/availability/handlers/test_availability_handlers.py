import json
from datetime import date

import pytest

from services.availability.applications import AvailabilityService
from services.availability.domain.entity import Blackout
from services.availability.domain.exception import ProviderTimeoutException
from services.availability.domain.value_object import BlackoutId
from services.availability.handlers import get_availability, get_unavailable_dates
from services.shared.domain import EventDate
from tests.unit.services.fakes import (
    FakeCalendarProvider,
    InMemoryBlackoutRepository,
    InMemoryBookingRepository,
    http_api_event,
)


@pytest.fixture
def calendar():
    return FakeCalendarProvider()


@pytest.fixture
def blackout_repository(monkeypatch, calendar, clock):
    """両ハンドラーのサービスをインメモリ実装に差し替える"""
    repository = InMemoryBlackoutRepository()
    service = AvailabilityService(
        blackout_repository=repository,
        booking_repository=InMemoryBookingRepository(),
        calendar=calendar,
        clock=clock,
        horizon_days=60,
    )
    monkeypatch.setattr(get_availability, "service", service)
    monkeypatch.setattr(get_unavailable_dates, "service", service)
    return repository


@pytest.fixture
def july_fourth_blackout(blackout_repository, tenant_id):
    blackout_repository.save(
        Blackout(
            id=BlackoutId.generate(),
            tenant_id=tenant_id,
            date=EventDate(date(2025, 7, 4)),
            reason="Holiday",
        )
    )


def _call(handler, lambda_context, query: dict, tenant_id: str = "acme"):
    event = http_api_event(
        "GET",
        f"/tenants/{tenant_id}/availability",
        path_parameters={"tenant_id": tenant_id},
        query=query,
    )
    response = handler.lambda_handler(event, lambda_context)
    return response["statusCode"], json.loads(response["body"])


class TestGetAvailabilityHandler:
    """空き状況 Lambda Handler のテスト"""

    def test_blackout_date_is_unavailable(self, july_fourth_blackout, lambda_context):
        # Act
        status, body = _call(get_availability, lambda_context, {"date": "2025-07-04"})

        # Assert
        assert status == 200
        assert body["data"] == {
            "date": "2025-07-04",
            "available": False,
            "reasons": ["blackout"],
            "degraded": False,
        }

    def test_open_date_is_available(self, july_fourth_blackout, lambda_context):
        status, body = _call(get_availability, lambda_context, {"date": "2025-07-05"})

        assert status == 200
        assert body["data"]["available"] is True

    def test_calendar_timeout_fails_open(self, blackout_repository, calendar, lambda_context):
        calendar.error = ProviderTimeoutException("calendar timed out")

        status, body = _call(get_availability, lambda_context, {"date": "2025-07-05"})

        assert status == 200
        assert body["data"]["available"] is True
        assert body["data"]["degraded"] is True

    @pytest.mark.parametrize("query", [{}, {"date": "tomorrow"}])
    def test_invalid_query_returns_400(self, blackout_repository, lambda_context, query):
        status, body = _call(get_availability, lambda_context, query)

        assert status == 400
        assert body["error_code"] == "VALIDATION_ERROR"


class TestGetUnavailableDatesHandler:
    def test_lists_unavailable_dates(self, july_fourth_blackout, calendar, lambda_context):
        # Arrange
        calendar.busy = {date(2025, 7, 10)}

        # Act
        status, body = _call(
            get_unavailable_dates,
            lambda_context,
            {"start": "2025-07-01", "end": "2025-07-31"},
        )

        # Assert
        assert status == 200
        assert body["data"] == {
            "dates": ["2025-07-04", "2025-07-10"],
            "degraded": False,
        }

    @pytest.mark.parametrize(
        "query",
        [
            {"start": "2025-07-31", "end": "2025-07-01"},
            {"start": "2025-07-01", "end": "2025-12-31"},
        ],
    )
    def test_invalid_range_returns_400(self, blackout_repository, lambda_context, query):
        status, body = _call(get_unavailable_dates, lambda_context, query)

        assert status == 400
        assert body["error_code"] == "INVALID_DATE_RANGE"
