from .availability_verdict import AvailabilityVerdict as AvailabilityVerdict
from .availability_verdict import UnavailableDates as UnavailableDates
from .blackout_id import BlackoutId as BlackoutId
from .date_range import DateRange as DateRange
