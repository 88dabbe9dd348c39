from .apartment import Apartment

__all__ = ["Apartment"]
