from .apartment_id import ApartmentId

__all__ = ["ApartmentId"]
