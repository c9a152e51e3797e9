import httpx
from aws_lambda_powertools.utilities import parameters

from services.availability.domain.gateway import CalendarProvider
from services.availability.infrastructure.google_calendar_provider import (
    GoogleCalendarProvider,
)
from services.availability.infrastructure.null_calendar_provider import (
    NullCalendarProvider,
)
from services.shared.config import Settings
from services.shared.utils import TenantClock

PARAMETER_MAX_AGE_SECONDS = 300


def build_calendar_provider(settings: Settings, clock: TenantClock) -> CalendarProvider:
    """設定に応じた CalendarProvider を組み立てる（連携なしなら Null）"""
    if not (settings.calendar_api_key_secret_name and settings.calendar_ids_parameter_name):
        return NullCalendarProvider()

    def load_api_key() -> str:
        return parameters.get_secret(
            settings.calendar_api_key_secret_name, max_age=PARAMETER_MAX_AGE_SECONDS
        )

    def load_calendar_ids() -> dict:
        return parameters.get_parameter(
            settings.calendar_ids_parameter_name,
            transform="json",
            max_age=PARAMETER_MAX_AGE_SECONDS,
        )

    client = httpx.Client(timeout=httpx.Timeout(settings.calendar_timeout_seconds))
    return GoogleCalendarProvider(
        client=client,
        api_key_loader=load_api_key,
        calendar_ids_loader=load_calendar_ids,
        clock=clock,
    )
