from dataclasses import dataclass

# ISO 4217 currencies without a minor unit
_ZERO_DECIMAL_CODES = frozenset({"JPY", "KRW", "CLP", "ISK", "VND"})


@dataclass(frozen=True)
class Currency:
    """Currency code (ISO 4217)

    e.g. EUR, USD, JPY
    """

    code: str

    def __post_init__(self) -> None:
        if len(self.code) != 3 or not self.code.isalpha():
            raise ValueError(f"Invalid currency code: {self.code}")
        # frozen=True still requires object.__setattr__ inside __post_init__
        object.__setattr__(self, "code", self.code.upper())

    def __str__(self) -> str:
        return self.code

    @property
    def minor_units(self) -> int:
        """Number of decimal places of the smallest unit"""
        return 0 if self.code in _ZERO_DECIMAL_CODES else 2

    @classmethod
    def eur(cls) -> "Currency":
        return cls("EUR")

