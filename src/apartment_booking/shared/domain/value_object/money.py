from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """Amount of money in a single currency

    Immutable value object. Arithmetic never mixes currencies and results
    are rounded to the currency's minor unit.
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def multiply(self, factor: int) -> "Money":
        """Multiply by a whole number, rounded to the minor unit"""
        if factor < 0:
            raise ValueError("Factor cannot be negative")
        return Money(
            amount=self._quantize(self.amount * factor),
            currency=self.currency,
        )

    def _quantize(self, amount: Decimal) -> Decimal:
        exponent = Decimal(1).scaleb(-self.currency.minor_units)
        return amount.quantize(exponent, rounding=ROUND_HALF_UP)

    @classmethod
    def of(cls, amount: Decimal | int | str, currency_code: str) -> "Money":
        """Build Money from a plain amount and currency code"""
        return cls(amount=Decimal(str(amount)), currency=Currency(currency_code))
