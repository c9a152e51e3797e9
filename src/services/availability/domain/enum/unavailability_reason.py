from enum import Enum


class UnavailabilityReason(str, Enum):
    """日付が予約できない理由"""

    PAST = "past"
    BLACKOUT = "blackout"
    CALENDAR = "calendar"
    BOOKED = "booked"
