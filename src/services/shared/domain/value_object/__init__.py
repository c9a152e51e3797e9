from .currency import Currency as Currency
from .event_date import EventDate as EventDate
from .money import Money as Money
from .tenant_id import TenantId as TenantId
