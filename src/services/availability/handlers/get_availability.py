from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.availability.applications import AvailabilityService
from services.availability.domain.exception import InvalidDateRangeException
from services.availability.handlers.request_models import AvailabilityQuery
from services.availability.handlers.response_models import availability_data
from services.availability.infrastructure import (
    DynamoDBBlackoutRepository,
    build_calendar_provider,
)
from services.booking.infrastructure import DynamoDBBookingRepository
from services.shared.config import Settings
from services.shared.domain import TenantId
from services.shared.utils import (
    TenantClock,
    api_response,
    error_response,
    to_error_response,
)
from services.shared.utils.aws import dynamodb_table

logger = Logger()
metrics = Metrics()

settings = Settings.from_env()
table = dynamodb_table(settings)
clock = TenantClock(settings.default_timezone, settings.tenant_timezones)
service = AvailabilityService(
    blackout_repository=DynamoDBBlackoutRepository(table),
    booking_repository=DynamoDBBookingRepository(table),
    calendar=build_calendar_provider(settings, clock),
    clock=clock,
    horizon_days=settings.availability_horizon_days,
)


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_HTTP)
@metrics.log_metrics
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """1日分の空き状況 Lambda Handler"""
    path_params = event.path_parameters or {}

    try:
        tenant_id = TenantId(value=path_params.get("tenant_id", ""))
        query = AvailabilityQuery.model_validate(event.query_string_parameters or {})
        logger.append_keys(tenant_id=str(tenant_id))

        verdict = service.get_availability(tenant_id, query.date)
        if verdict.degraded:
            metrics.add_metric(
                name="CalendarProviderDegraded", unit=MetricUnit.Count, value=1
            )
        return api_response(
            200, {"status": "success", "data": availability_data(verdict)}
        )
    except InvalidDateRangeException as e:
        return error_response(400, "INVALID_DATE_RANGE", str(e))
    except Exception as e:
        response = to_error_response(e)
        if response is None:
            logger.exception("Failed to check availability")
            return error_response(500, "INTERNAL_ERROR", "Internal server error")
        return response
