from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .event import DomainEvent as DomainEvent
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .repository import Repository as Repository
from .value_object import (
    Currency as Currency,
)
from .value_object import (
    EventDate as EventDate,
)
from .value_object import (
    Money as Money,
)
from .value_object import (
    TenantId as TenantId,
)
