class DomainException(Exception):
    """Base exception raised from the domain layer"""

    pass


class ResourceNotFoundException(DomainException):
    """The requested resource does not exist"""

    pass


class BusinessRuleViolationException(DomainException):
    """A business rule was violated"""

    pass


class DuplicateResourceException(DomainException):
    """The resource already exists (conditional write failed)"""

    pass


class OptimisticLockException(DomainException):
    """The stored state no longer matches the expected state"""

    pass


class AuthenticationException(DomainException):
    """Missing or invalid credentials"""

    pass


class AuthorizationException(DomainException):
    """The caller is authenticated but not allowed to do this"""

    pass


class PaymentGatewayException(DomainException):
    """An external payment provider rejected or failed the request"""

    pass


class ConfigurationException(DomainException):
    """Required configuration or secret is missing"""

    pass
