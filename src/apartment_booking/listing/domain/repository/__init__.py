from .apartment_repository import ApartmentRepository

__all__ = ["ApartmentRepository"]
