from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .enum import DayOfWeek as DayOfWeek
from .enum import TimeSlot as TimeSlot
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
    ErrorCode as ErrorCode,
)
from .exception import (
    ErrorKind as ErrorKind,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .repository import Repository as Repository
from .value_object import (
    Money as Money,
)
from .value_object import (
    PlaceId as PlaceId,
)
from .value_object import (
    ProductId as ProductId,
)
from .value_object import (
    ReservationId as ReservationId,
)
from .value_object import (
    RoomId as RoomId,
)
from .value_object import (
    TimeRange as TimeRange,
)
