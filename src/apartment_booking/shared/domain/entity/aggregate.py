from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """Base class for aggregate roots

    - entities inside the aggregate are reached only through the root
    - the aggregate is the consistency boundary of a single commit
    """

    pass
