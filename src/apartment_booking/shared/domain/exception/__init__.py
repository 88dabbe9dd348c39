from .exceptions import (
    AccessDeniedException,
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)

__all__ = [
    "DomainException",
    "ResourceNotFoundException",
    "BusinessRuleViolationException",
    "AccessDeniedException",
    "DuplicateResourceException",
    "OptimisticLockException",
]
