from .entity import AggregateRoot, Entity
from .exception import (
    AccessDeniedException,
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)
from .repository import Repository
from .value_object import Currency, IsoDateTime, Money, UserId

__all__ = [
    "Entity",
    "AggregateRoot",
    "Repository",
    "DomainException",
    "ResourceNotFoundException",
    "BusinessRuleViolationException",
    "AccessDeniedException",
    "DuplicateResourceException",
    "OptimisticLockException",
    "UserId",
    "Currency",
    "Money",
    "IsoDateTime",
]
