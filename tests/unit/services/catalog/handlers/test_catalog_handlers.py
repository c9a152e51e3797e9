import json

import pytest

from services.catalog.applications import CatalogService
from services.catalog.handlers import get_package, list_packages
from services.shared.cache import TtlCache
from tests.unit.services.fakes import (
    InMemoryCatalogRepository,
    http_api_event,
    make_add_on,
    make_package,
)


@pytest.fixture
def catalog_repository(monkeypatch):
    """両ハンドラーのサービスをインメモリ実装に差し替える"""
    repository = InMemoryCatalogRepository()
    repository.add_package(make_package())
    repository.add_package(
        make_package(package_id="pkg-wedding", slug="wedding", title="Wedding", segment_id="weddings")
    )
    repository.add_package(
        make_package(package_id="pkg-retired", slug="retired", title="Retired", active=False)
    )
    repository.add_add_on(make_add_on())
    service = CatalogService(repository, TtlCache())
    monkeypatch.setattr(list_packages, "service", service)
    monkeypatch.setattr(get_package, "service", service)
    return repository


def _call(handler, lambda_context, path_parameters: dict, query: dict | None = None):
    event = http_api_event(
        "GET", "/tenants/acme/packages", path_parameters=path_parameters, query=query
    )
    response = handler.lambda_handler(event, lambda_context)
    return response["statusCode"], json.loads(response["body"])


class TestListPackagesHandler:
    """パッケージ一覧 Lambda Handler のテスト"""

    def test_lists_active_packages_with_add_ons(self, catalog_repository, lambda_context):
        # Act
        status, body = _call(list_packages, lambda_context, {"tenant_id": "acme"})

        # Assert
        assert status == 200
        slugs = sorted(p["slug"] for p in body["data"])
        assert slugs == ["sunset", "wedding"]
        sunset = next(p for p in body["data"] if p["slug"] == "sunset")
        assert sunset["price"] == 50000
        assert [a["title"] for a in sunset["add_ons"]] == ["Photos"]

    def test_filters_by_segment(self, catalog_repository, lambda_context):
        status, body = _call(
            list_packages,
            lambda_context,
            {"tenant_id": "acme"},
            query={"segment_id": "weddings"},
        )

        assert status == 200
        assert [p["slug"] for p in body["data"]] == ["wedding"]

    def test_other_tenant_sees_nothing(self, catalog_repository, lambda_context):
        status, body = _call(list_packages, lambda_context, {"tenant_id": "globex"})

        assert status == 200
        assert body["data"] == []

    def test_invalid_tenant_returns_400(self, catalog_repository, lambda_context):
        status, body = _call(list_packages, lambda_context, {"tenant_id": "acme:all"})

        assert status == 400
        assert body["error_code"] == "VALIDATION_ERROR"


class TestGetPackageHandler:
    def test_returns_package(self, catalog_repository, lambda_context):
        status, body = _call(
            get_package, lambda_context, {"tenant_id": "acme", "slug": "sunset"}
        )

        assert status == 200
        assert body["data"]["title"] == "Sunset Session"

    @pytest.mark.parametrize("slug", ["missing", "retired"])
    def test_unknown_or_inactive_returns_404(self, catalog_repository, lambda_context, slug):
        status, body = _call(
            get_package, lambda_context, {"tenant_id": "acme", "slug": slug}
        )

        assert status == 404
        assert body["error_code"] == "NOT_FOUND"

    def test_unexpected_error_returns_500(self, catalog_repository, lambda_context, monkeypatch):
        def _boom(*args, **kwargs):
            raise RuntimeError("table unavailable")

        monkeypatch.setattr(get_package.service, "get_package", _boom)

        status, body = _call(
            get_package, lambda_context, {"tenant_id": "acme", "slug": "sunset"}
        )

        assert status == 500
        assert body["error_code"] == "INTERNAL_ERROR"
