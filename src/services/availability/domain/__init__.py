from .entity import Blackout as Blackout
from .enum import UnavailabilityReason as UnavailabilityReason
from .gateway import CalendarProvider as CalendarProvider
from .repository import BlackoutRepository as BlackoutRepository
from .value_object import AvailabilityVerdict as AvailabilityVerdict
from .value_object import BlackoutId as BlackoutId
from .value_object import DateRange as DateRange
from .value_object import UnavailableDates as UnavailableDates
