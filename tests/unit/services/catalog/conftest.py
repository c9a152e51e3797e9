import pytest

from services.catalog.applications import CatalogAdminService, CatalogService
from services.catalog.domain.factory import CatalogFactory
from services.shared.cache import TtlCache
from tests.unit.services.fakes import InMemoryCatalogRepository


class FakeTimer:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def catalog_repository():
    return InMemoryCatalogRepository()


@pytest.fixture
def catalog_service(catalog_repository, timer):
    return CatalogService(
        repository=catalog_repository, cache=TtlCache(ttl_seconds=900, timer=timer)
    )


@pytest.fixture
def admin_service(catalog_repository, catalog_service):
    return CatalogAdminService(
        repository=catalog_repository,
        factory=CatalogFactory(),
        catalog=catalog_service,
    )
