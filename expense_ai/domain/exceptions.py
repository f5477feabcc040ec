"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AIServiceError(DomainException):
    """Chat-completion service failed, is unreachable or is not configured"""

    pass


class MalformedReplyError(DomainException):
    """Model reply is empty or does not have the expected shape"""

    pass


class UnknownPlanError(DomainException):
    """Requested subscription tier does not exist"""

    pass
