from .currency import Currency
from .iso_date_time import IsoDateTime
from .money import Money
from .user_id import UserId

__all__ = ["UserId", "Currency", "Money", "IsoDateTime"]
