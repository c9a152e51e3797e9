from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class BlackoutId:
    """ブラックアウトID"""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> BlackoutId:
        return cls(value=f"blk_{uuid.uuid4().hex}")
