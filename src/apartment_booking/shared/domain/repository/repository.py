from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Base repository

    - abstracts persistence of one aggregate type
    """

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """Find an aggregate by id"""
        raise NotImplementedError
