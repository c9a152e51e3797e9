from __future__ import annotations

from dataclasses import dataclass

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（最小通貨単位の整数 + 通貨）

    例: USD の 50000 は $500.00 を表す。
    """

    amount: int
    currency: Currency

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("Amount must be an integer in minor currency units")
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        if self.currency != other.currency:
            raise ValueError("Cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        return cls(0, currency)

    @classmethod
    def usd(cls, amount: int) -> Money:
        """米ドルで Money を生成"""
        return cls(amount, Currency.usd())
