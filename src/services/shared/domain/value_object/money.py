from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """Amount together with its currency"""

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """Add two amounts of the same currency"""
        if self.currency != other.currency:
            raise ValueError("Cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, factor: int) -> Money:
        """Multiply by a whole quantity (e.g. number of seats)"""
        return Money(amount=self.amount * factor, currency=self.currency)

    def to_minor_units(self) -> int:
        """Amount in the smallest currency unit (centavos, cents)"""
        cents = (self.amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return int(cents)

    @classmethod
    def php(cls, amount: Decimal | int | str) -> Money:
        """Build Money in Philippine pesos"""
        return cls(Decimal(str(amount)), Currency.php())

    @classmethod
    def usd(cls, amount: Decimal | int | str) -> Money:
        """Build Money in US dollars"""
        return cls(Decimal(str(amount)), Currency.usd())
