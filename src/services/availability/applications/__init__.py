from .availability_service import AvailabilityService as AvailabilityService
from .blackout_service import BlackoutService as BlackoutService
