import json

import pytest
from botocore.exceptions import ClientError

from services.admin.handlers import admin_api
from services.availability.applications import BlackoutService
from services.booking.applications import BookingQueryService
from services.catalog.applications import CatalogAdminService, CatalogService
from services.catalog.domain.factory import CatalogFactory
from services.shared.cache import TtlCache
from tests.unit.services.fakes import (
    InMemoryBlackoutRepository,
    InMemoryBookingRepository,
    InMemoryCatalogRepository,
    http_api_event,
    make_booking,
)


@pytest.fixture
def catalog_repository(monkeypatch):
    """管理 API のサービスをインメモリ実装に差し替える"""
    repository = InMemoryCatalogRepository()
    catalog = CatalogService(repository, TtlCache())
    monkeypatch.setattr(admin_api, "catalog", catalog)
    monkeypatch.setattr(
        admin_api,
        "catalog_admin",
        CatalogAdminService(repository, CatalogFactory(), catalog),
    )
    monkeypatch.setattr(
        admin_api, "blackouts", BlackoutService(InMemoryBlackoutRepository())
    )
    return repository


@pytest.fixture
def booking_repository(monkeypatch):
    repository = InMemoryBookingRepository()
    monkeypatch.setattr(admin_api, "bookings", BookingQueryService(repository))
    return repository


@pytest.fixture
def call(catalog_repository, booking_repository, lambda_context):
    def _call(method: str, path: str, body: dict | None = None):
        event = http_api_event(
            method, path, body=json.dumps(body) if body is not None else None
        )
        response = admin_api.lambda_handler(event, lambda_context)
        return response["statusCode"], json.loads(response["body"])

    return _call


PACKAGE = {
    "slug": "sunset",
    "title": "Sunset Session",
    "description": "One hour at golden hour",
    "price": 50000,
}


class TestCatalogRoutes:
    """管理 API（カタログ）のテスト"""

    def test_create_and_list_package(self, call):
        # Act
        status, created = call("POST", "/admin/tenants/acme/packages", PACKAGE)
        _, listed = call("GET", "/admin/tenants/acme/catalog")

        # Assert
        assert status == 201
        assert created["data"]["slug"] == "sunset"
        assert created["data"]["price"] == 50000
        assert [p["title"] for p in listed["data"]["packages"]] == ["Sunset Session"]

    def test_duplicate_slug_returns_409(self, call):
        call("POST", "/admin/tenants/acme/packages", PACKAGE)

        status, body = call("POST", "/admin/tenants/acme/packages", PACKAGE)

        assert status == 409
        assert body["error_code"] == "CONFLICT"

    @pytest.mark.parametrize("price", [-1, "500.00", 12.5])
    def test_invalid_price_returns_400(self, call, price):
        status, body = call(
            "POST", "/admin/tenants/acme/packages", {**PACKAGE, "price": price}
        )

        assert status == 400
        assert body["error_code"] == "VALIDATION_ERROR"

    def test_write_conflict_returns_retryable_503(self, call, catalog_repository):
        """同時書き込みの競合は重複扱いにせず再試行を促す"""

        def conflicting(package):
            raise ClientError(
                {
                    "Error": {"Code": "TransactionCanceledException", "Message": "cancelled"},
                    "CancellationReasons": [
                        {"Code": "None"},
                        {"Code": "None"},
                        {"Code": "TransactionConflict"},
                    ],
                },
                "TransactWriteItems",
            )

        catalog_repository.add_package = conflicting

        status, body = call("POST", "/admin/tenants/acme/packages", PACKAGE)

        assert status == 503
        assert body["error_code"] == "STORAGE_UNAVAILABLE"
        assert body["retryable"] is True

    def test_update_package(self, call):
        _, created = call("POST", "/admin/tenants/acme/packages", PACKAGE)
        package_id = created["data"]["package_id"]

        status, body = call(
            "PATCH", f"/admin/tenants/acme/packages/{package_id}", {"price": 60000}
        )

        assert status == 200
        assert body["data"]["price"] == 60000
        assert body["data"]["title"] == "Sunset Session"

    def test_delete_unknown_package_returns_404(self, call):
        status, body = call("DELETE", "/admin/tenants/acme/packages/pkg-missing")

        assert status == 404
        assert body["error_code"] == "NOT_FOUND"

    def test_add_on_for_unknown_package_returns_422(self, call):
        status, _ = call(
            "POST",
            "/admin/tenants/acme/add-ons",
            {"title": "Photos", "price": 15000, "package_id": "pkg-missing"},
        )

        assert status == 422

    def test_invalid_tenant_returns_400(self, call):
        status, _ = call("GET", "/admin/tenants/bad%3Atenant/catalog")

        assert status == 400


class TestBlackoutRoutes:
    def test_add_list_remove(self, call):
        # Act
        status, _ = call(
            "POST", "/admin/tenants/acme/blackouts", {"date": "2025-07-04", "reason": "Holiday"}
        )
        _, listed = call("GET", "/admin/tenants/acme/blackouts")
        removed, _ = call("DELETE", "/admin/tenants/acme/blackouts/2025-07-04")
        _, after = call("GET", "/admin/tenants/acme/blackouts")

        # Assert
        assert status == 201
        assert listed["data"] == [
            {"blackout_id": listed["data"][0]["blackout_id"], "date": "2025-07-04", "reason": "Holiday"}
        ]
        assert removed == 200
        assert after["data"] == []

    def test_duplicate_blackout_returns_409(self, call):
        call("POST", "/admin/tenants/acme/blackouts", {"date": "2025-07-04"})

        status, _ = call("POST", "/admin/tenants/acme/blackouts", {"date": "2025-07-04"})

        assert status == 409


class TestBookingRoutes:
    def test_list_and_get_bookings(self, call, booking_repository):
        # Arrange
        booking_repository.save(make_booking())

        # Act
        _, listed = call("GET", "/admin/tenants/acme/bookings")
        status, fetched = call("GET", "/admin/tenants/acme/bookings/bk-1")
        missing, _ = call("GET", "/admin/tenants/acme/bookings/bk-missing")

        # Assert
        assert [b["booking_id"] for b in listed["data"]] == ["bk-1"]
        assert status == 200
        assert fetched["data"]["status"] == "pending_payment"
        assert fetched["data"]["total"] == 65000
        assert missing == 404
