from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class PackageId:
    """パッケージID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Package id cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> PackageId:
        return cls(value=f"pkg_{uuid.uuid4().hex}")
