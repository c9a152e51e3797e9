from .unavailability_reason import UnavailabilityReason as UnavailabilityReason
