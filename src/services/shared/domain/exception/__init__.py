from .exceptions import AuthenticationException as AuthenticationException
from .exceptions import AuthorizationException as AuthorizationException
from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import ConfigurationException as ConfigurationException
from .exceptions import DomainException as DomainException
from .exceptions import DuplicateResourceException as DuplicateResourceException
from .exceptions import OptimisticLockException as OptimisticLockException
from .exceptions import PaymentGatewayException as PaymentGatewayException
from .exceptions import ResourceNotFoundException as ResourceNotFoundException
