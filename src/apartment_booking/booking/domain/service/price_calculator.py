from apartment_booking.booking.domain.value_object import DateRange
from apartment_booking.shared.domain import Money


def compute_price(stay: DateRange, price_per_night: Money) -> Money:
    """Authoritative total for a stay: nights x nightly rate"""
    return price_per_night.multiply(stay.nights())
