from .calendar_provider import CalendarProvider as CalendarProvider
