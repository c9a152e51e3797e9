from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    """予約者"""

    name: str
    email: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Customer name cannot be empty")
        if len(self.name) > 200:
            raise ValueError("Customer name is too long (max 200 characters)")
        if "@" not in self.email:
            raise ValueError(f"Invalid email address: {self.email!r}")
