import re
from dataclasses import dataclass

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class PackageSlug:
    """パッケージのスラッグ（テナント内で一意）

    例: "sunset", "full-day-wedding"
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _SLUG_PATTERN.match(self.value):
            raise ValueError(f"Invalid package slug: {self.value!r}")
        if len(self.value) > 80:
            raise ValueError("Package slug is too long (max 80 characters)")

    def __str__(self) -> str:
        return self.value
