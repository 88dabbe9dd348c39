class DomainException(Exception):
    """Base exception raised by the domain layer"""

    pass


class ResourceNotFoundException(DomainException):
    """A referenced resource does not exist"""

    pass


class BusinessRuleViolationException(DomainException):
    """A business rule was violated"""

    pass


class AccessDeniedException(DomainException):
    """The requester may not act on the resource"""

    pass


class DuplicateResourceException(DomainException):
    """Resource already exists (conditional put failed)"""

    pass


class OptimisticLockException(DomainException):
    """Stored state differs from the expected version or status"""

    pass
