import pytest

from services.catalog.domain.factory import AddOnDetails, PackageDetails
from services.catalog.domain.value_object import AddOnId, PackageId, PackageSlug
from services.shared.domain import Money
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    ResourceNotFoundException,
)


@pytest.fixture
def package_details():
    def _factory(**overrides) -> PackageDetails:
        details: PackageDetails = {
            "slug": "sunset",
            "title": "Sunset Session",
            "description": "One hour at golden hour",
            "price": 50000,
            "active": True,
            "segment_id": None,
        }
        details.update(overrides)
        return details

    return _factory


@pytest.fixture
def add_on_details():
    def _factory(**overrides) -> AddOnDetails:
        details: AddOnDetails = {
            "title": "Photos",
            "price": 15000,
            "package_id": None,
            "active": True,
        }
        details.update(overrides)
        return details

    return _factory


class TestPackageAdministration:
    """CatalogAdminService（パッケージ）のテスト"""

    def test_created_package_is_visible_immediately(self, admin_service, catalog_service, package_details, tenant_id):
        """書き込み後の読み取りでキャッシュの古い値が返らない"""
        # Arrange
        assert catalog_service.get_packages(tenant_id) == []

        # Act
        package = admin_service.create_package(tenant_id, package_details())

        # Assert
        assert package.id.value.startswith("pkg_")
        assert [p.title for p in catalog_service.get_packages(tenant_id)] == ["Sunset Session"]

    def test_duplicate_slug_is_rejected(self, admin_service, package_details, tenant_id):
        admin_service.create_package(tenant_id, package_details())

        with pytest.raises(DuplicateResourceException, match="sunset"):
            admin_service.create_package(tenant_id, package_details(title="Other"))

    def test_update_reflects_in_storefront(self, admin_service, catalog_service, package_details, tenant_id):
        # Arrange
        package = admin_service.create_package(tenant_id, package_details())
        catalog_service.get_packages(tenant_id)

        # Act
        updated = admin_service.update_package(
            tenant_id, package.id, {"price": 60000, "slug": "golden-hour"}
        )

        # Assert
        assert updated.price == Money.usd(60000)
        listing = catalog_service.get_package(tenant_id, PackageSlug("golden-hour"))
        assert listing.price == Money.usd(60000)

    def test_deactivated_package_disappears(self, admin_service, catalog_service, package_details, tenant_id):
        package = admin_service.create_package(tenant_id, package_details())
        catalog_service.get_packages(tenant_id)

        admin_service.update_package(tenant_id, package.id, {"active": False})

        assert catalog_service.get_packages(tenant_id) == []
        packages, _ = admin_service.list_all(tenant_id)
        assert len(packages) == 1

    def test_segment_can_be_cleared(self, admin_service, package_details, tenant_id):
        package = admin_service.create_package(tenant_id, package_details(segment_id="weddings"))

        updated = admin_service.update_package(tenant_id, package.id, {"segment_id": None})

        assert updated.segment_id is None

    def test_update_unknown_package_raises_not_found(self, admin_service, tenant_id):
        with pytest.raises(ResourceNotFoundException):
            admin_service.update_package(tenant_id, PackageId("pkg-missing"), {"title": "x"})

    def test_delete_removes_dedicated_add_ons(self, admin_service, catalog_repository, package_details, add_on_details, tenant_id):
        # Arrange
        package = admin_service.create_package(tenant_id, package_details())
        admin_service.create_add_on(tenant_id, add_on_details(package_id=str(package.id)))
        global_add_on = admin_service.create_add_on(tenant_id, add_on_details(title="Prints"))

        # Act
        admin_service.delete_package(tenant_id, package.id)

        # Assert
        packages, add_ons = admin_service.list_all(tenant_id)
        assert packages == []
        assert [a.id for a in add_ons] == [global_add_on.id]


class TestAddOnAdministration:
    """CatalogAdminService（アドオン）のテスト"""

    def test_add_on_for_unknown_package_is_rejected(self, admin_service, add_on_details, tenant_id):
        with pytest.raises(BusinessRuleViolationException, match="unknown package"):
            admin_service.create_add_on(tenant_id, add_on_details(package_id="pkg-missing"))

    def test_update_and_delete_add_on(self, admin_service, catalog_service, package_details, add_on_details, tenant_id):
        # Arrange
        admin_service.create_package(tenant_id, package_details())
        add_on = admin_service.create_add_on(tenant_id, add_on_details())
        catalog_service.get_packages(tenant_id)

        # Act
        admin_service.update_add_on(tenant_id, add_on.id, {"price": 20000})

        # Assert
        listing = catalog_service.get_packages(tenant_id)[0]
        assert listing.add_ons[0].price == Money.usd(20000)

        admin_service.delete_add_on(tenant_id, add_on.id)
        assert catalog_service.get_packages(tenant_id)[0].add_ons == ()

    def test_delete_unknown_add_on_raises_not_found(self, admin_service, tenant_id):
        with pytest.raises(ResourceNotFoundException):
            admin_service.delete_add_on(tenant_id, AddOnId("addon-missing"))
