from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..value_object.tenant_id import TenantId

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Repository 基底クラス

    - 集約の永続化を抽象化する
    - 検索は必ずテナントを明示的に受け取る（テナント横断の読み取りを型で防ぐ）
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """集約を永続化する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, tenant_id: TenantId, id: ID) -> T | None:
        """テナント内で ID により集約を検索する"""
        raise NotImplementedError
