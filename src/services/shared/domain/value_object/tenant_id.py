import re
from dataclasses import dataclass

_TENANT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@dataclass(frozen=True)
class TenantId:
    """テナントID（全サービス共通）

    ストア・キャッシュのキーに必ず埋め込まれるため、
    不正な値はフォールバックせずに生成時点で拒否する。
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _TENANT_ID_PATTERN.match(
            self.value
        ):
            raise ValueError(f"Invalid tenant id: {self.value!r}")

    def __str__(self) -> str:
        return self.value
