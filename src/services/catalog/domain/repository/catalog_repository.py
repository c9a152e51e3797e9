from abc import ABC, abstractmethod

from services.catalog.domain.entity import AddOn, Package
from services.catalog.domain.value_object import AddOnId, PackageId, PackageSlug
from services.shared.domain import TenantId


class CatalogRepository(ABC):
    """カタログストアのインターフェース

    パッケージ・アドオンへの書き込みは、テナントのカタログバージョンの
    インクリメントと同一トランザクションで行う。
    """

    @abstractmethod
    def get_version(self, tenant_id: TenantId) -> int:
        """テナントの現在のカタログバージョンを返す（未作成なら 0）"""
        raise NotImplementedError

    @abstractmethod
    def load_catalog(
        self, tenant_id: TenantId
    ) -> tuple[int, list[Package], list[AddOn]]:
        """バージョン・全パッケージ・全アドオンを読み込む

        バージョンはアイテムより先に読む（古いバージョンで新しい内容を
        スタンプするのは安全だが、その逆は古い内容を残してしまう）。
        """
        raise NotImplementedError

    @abstractmethod
    def find_package(self, tenant_id: TenantId, package_id: PackageId) -> Package | None:
        raise NotImplementedError

    @abstractmethod
    def find_add_ons(
        self, tenant_id: TenantId, add_on_ids: list[AddOnId]
    ) -> list[AddOn]:
        """指定IDのアドオンを返す（存在しないIDは結果に含まれない）"""
        raise NotImplementedError

    @abstractmethod
    def find_add_on(self, tenant_id: TenantId, add_on_id: AddOnId) -> AddOn | None:
        raise NotImplementedError

    @abstractmethod
    def add_package(self, package: Package) -> None:
        """パッケージを追加する（スラッグ重複時は DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def update_package(self, package: Package, previous_slug: PackageSlug) -> None:
        """パッケージを更新する（スラッグ変更時は新スラッグを確保する）"""
        raise NotImplementedError

    @abstractmethod
    def remove_package(self, package: Package, add_ons: list[AddOn]) -> None:
        """パッケージと専用アドオンを削除する"""
        raise NotImplementedError

    @abstractmethod
    def add_add_on(self, add_on: AddOn) -> None:
        raise NotImplementedError

    @abstractmethod
    def update_add_on(self, add_on: AddOn) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_add_on(self, add_on: AddOn) -> None:
        raise NotImplementedError
