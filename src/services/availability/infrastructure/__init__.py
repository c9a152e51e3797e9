from .dynamodb_blackout_repository import (
    DynamoDBBlackoutRepository as DynamoDBBlackoutRepository,
)
from .google_calendar_provider import GoogleCalendarProvider as GoogleCalendarProvider
from .null_calendar_provider import NullCalendarProvider as NullCalendarProvider
from .calendar_provider_factory import (
    build_calendar_provider as build_calendar_provider,
)
