from .entity import Apartment
from .repository import ApartmentRepository
from .value_object import ApartmentId

__all__ = ["Apartment", "ApartmentId", "ApartmentRepository"]
