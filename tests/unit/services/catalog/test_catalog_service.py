import pytest

from services.catalog.domain.value_object import AddOnId, PackageId, PackageSlug
from services.shared.domain import Money, TenantId
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)
from tests.unit.services.fakes import make_add_on, make_package


@pytest.fixture
def seed(catalog_repository):
    """Factory fixture: パッケージ・アドオンをリポジトリに登録する"""

    def _seed(*entities):
        for entity in entities:
            if hasattr(entity, "slug"):
                catalog_repository.add_package(entity)
            else:
                catalog_repository.add_add_on(entity)

    return _seed


class TestGetPackages:
    """CatalogService.get_packages のテスト"""

    def test_second_read_is_served_from_cache(self, catalog_service, catalog_repository, seed, tenant_id):
        # Arrange
        seed(make_package(), make_add_on())

        # Act
        first = catalog_service.get_packages(tenant_id)
        second = catalog_service.get_packages(tenant_id)

        # Assert
        assert first == second
        assert catalog_repository.load_calls == 1

    def test_stale_snapshot_is_reloaded_when_version_moves(self, catalog_service, catalog_repository, seed, tenant_id):
        """別インスタンスでの書き込み（バージョン更新）も反映される"""
        # Arrange
        seed(make_package())
        catalog_service.get_packages(tenant_id)

        # Act: キャッシュを経由しない書き込み
        package = make_package()
        package.revise(price=Money.usd(60000))
        catalog_repository.update_package(package, PackageSlug("sunset"))
        packages = catalog_service.get_packages(tenant_id)

        # Assert
        assert packages[0].price == Money.usd(60000)
        assert catalog_repository.load_calls == 2

    def test_snapshot_expires_after_ttl(self, catalog_service, catalog_repository, seed, tenant_id, timer):
        seed(make_package())
        catalog_service.get_packages(tenant_id)

        timer.now = 901
        catalog_service.get_packages(tenant_id)

        assert catalog_repository.load_calls == 2

    def test_tenants_are_isolated(self, catalog_service, seed, tenant_id):
        """テナント A のキャッシュがテナント B に返ることはない"""
        # Arrange
        seed(
            make_package(title="Acme Sunset"),
            make_package(tenant_id="globex", package_id="pkg-g", title="Globex Sunset"),
        )

        # Act
        acme = catalog_service.get_packages(tenant_id)
        globex = catalog_service.get_packages(TenantId("globex"))

        # Assert
        assert [p.title for p in acme] == ["Acme Sunset"]
        assert [p.title for p in globex] == ["Globex Sunset"]

    def test_segment_filter(self, catalog_service, seed, tenant_id):
        seed(
            make_package(package_id="pkg-a", slug="a", title="A", segment_id="weddings"),
            make_package(package_id="pkg-b", slug="b", title="B"),
        )

        packages = catalog_service.get_packages(tenant_id, segment_id="weddings")

        assert [p.title for p in packages] == ["A"]

    def test_invalidate_drops_cached_snapshot(self, catalog_service, catalog_repository, seed, tenant_id):
        seed(make_package())
        catalog_service.get_packages(tenant_id)

        catalog_service.invalidate(tenant_id)
        catalog_service.get_packages(tenant_id)

        assert catalog_repository.load_calls == 2


class TestGetPackage:
    def test_found_by_slug(self, catalog_service, seed, tenant_id):
        seed(make_package())

        package = catalog_service.get_package(tenant_id, PackageSlug("sunset"))

        assert package.package_id == PackageId("pkg-sunset")

    def test_inactive_package_is_not_found(self, catalog_service, seed, tenant_id):
        seed(make_package(active=False))

        with pytest.raises(ResourceNotFoundException, match="Package not found: sunset"):
            catalog_service.get_package(tenant_id, PackageSlug("sunset"))


class TestLoadForCheckout:
    """CatalogService.load_for_checkout のテスト"""

    def test_reads_current_prices_from_store(self, catalog_service, catalog_repository, seed, tenant_id):
        """キャッシュが古くても、チェックアウトはストアの現在価格を使う"""
        # Arrange
        seed(make_package(price=50000), make_add_on(price=15000))
        catalog_service.get_packages(tenant_id)
        package = make_package(price=52000)
        catalog_repository.packages[(tenant_id, package.id)] = package

        # Act
        selection = catalog_service.load_for_checkout(
            tenant_id, PackageId("pkg-sunset"), [AddOnId("addon-photos")]
        )

        # Assert
        assert selection.package_price == Money.usd(52000)
        assert selection.package_title == "Sunset Session"
        assert [a.price for a in selection.add_ons] == [Money.usd(15000)]

    def test_duplicate_add_on_ids_are_counted_once(self, catalog_service, seed, tenant_id):
        seed(make_package(), make_add_on())

        selection = catalog_service.load_for_checkout(
            tenant_id,
            PackageId("pkg-sunset"),
            [AddOnId("addon-photos"), AddOnId("addon-photos")],
        )

        assert len(selection.add_ons) == 1

    def test_inactive_package_is_rejected(self, catalog_service, seed, tenant_id):
        seed(make_package(active=False))

        with pytest.raises(BusinessRuleViolationException, match="Package is not available"):
            catalog_service.load_for_checkout(tenant_id, PackageId("pkg-sunset"), [])

    def test_add_on_of_another_package_is_rejected(self, catalog_service, seed, tenant_id):
        seed(make_package(), make_add_on(package_id="pkg-wedding"))

        with pytest.raises(BusinessRuleViolationException, match="addon-photos"):
            catalog_service.load_for_checkout(
                tenant_id, PackageId("pkg-sunset"), [AddOnId("addon-photos")]
            )

    def test_add_on_of_another_tenant_is_rejected(self, catalog_service, seed, tenant_id):
        seed(make_package(), make_add_on(tenant_id="globex"))

        with pytest.raises(BusinessRuleViolationException):
            catalog_service.load_for_checkout(
                tenant_id, PackageId("pkg-sunset"), [AddOnId("addon-photos")]
            )
