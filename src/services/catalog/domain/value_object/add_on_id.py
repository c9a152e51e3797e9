from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class AddOnId:
    """アドオンID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Add-on id cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> AddOnId:
        return cls(value=f"addon_{uuid.uuid4().hex}")
