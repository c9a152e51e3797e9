from aws_lambda_powertools import Logger
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.availability.applications import AvailabilityService
from services.availability.infrastructure import (
    DynamoDBBlackoutRepository,
    build_calendar_provider,
)
from services.booking.applications import CreateCheckoutService
from services.booking.domain.exception import (
    DateUnavailableException,
    PaymentGatewayException,
    PaymentGatewayTimeoutException,
)
from services.booking.domain.factory import BookingFactory
from services.booking.domain.value_object import Customer
from services.booking.handlers.request_models import CreateCheckoutRequest
from services.booking.handlers.response_models import checkout_response
from services.booking.infrastructure import (
    DynamoDBBookingRepository,
    build_payment_gateway,
)
from services.catalog.applications import CatalogService
from services.catalog.domain.value_object import AddOnId, PackageId
from services.catalog.infrastructure import DynamoDBCatalogRepository
from services.shared.cache import TtlCache
from services.shared.config import Settings
from services.shared.domain import EventDate, TenantId
from services.shared.utils import (
    TenantClock,
    api_response,
    error_response,
    to_error_response,
)
from services.shared.utils.aws import dynamodb_table

logger = Logger()

settings = Settings.from_env()
table = dynamodb_table(settings)
clock = TenantClock(settings.default_timezone, settings.tenant_timezones)
booking_repository = DynamoDBBookingRepository(table)
availability = AvailabilityService(
    blackout_repository=DynamoDBBlackoutRepository(table),
    booking_repository=booking_repository,
    calendar=build_calendar_provider(settings, clock),
    clock=clock,
    horizon_days=settings.availability_horizon_days,
)
catalog = CatalogService(
    repository=DynamoDBCatalogRepository(table),
    cache=TtlCache(ttl_seconds=settings.catalog_cache_ttl_seconds),
)
service = CreateCheckoutService(
    availability=availability,
    catalog=catalog,
    factory=BookingFactory(),
    repository=booking_repository,
    gateway=build_payment_gateway(settings),
    clock=clock,
    public_base_url=settings.public_base_url,
    session_ttl_minutes=settings.checkout_session_ttl_minutes,
)


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_HTTP)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """チェックアウト作成 Lambda Handler"""
    path_params = event.path_parameters or {}

    try:
        tenant_id = TenantId(value=path_params.get("tenant_id", ""))
        logger.append_keys(tenant_id=str(tenant_id))
        request = CreateCheckoutRequest.model_validate_json(event.decoded_body or "{}")

        result = service.create_checkout(
            tenant_id=tenant_id,
            package_id=PackageId(value=request.package_id),
            event_date=EventDate(request.event_date),
            add_on_ids=[AddOnId(value=a) for a in request.add_on_ids],
            customer=Customer(name=request.customer_name, email=request.customer_email),
        )
        return api_response(201, checkout_response(result))
    except DateUnavailableException as e:
        return error_response(409, "DATE_UNAVAILABLE", str(e), details=e.reasons)
    except PaymentGatewayTimeoutException as e:
        return error_response(504, "PAYMENT_GATEWAY_TIMEOUT", str(e), retryable=True)
    except PaymentGatewayException as e:
        return error_response(502, "PAYMENT_GATEWAY_ERROR", str(e), retryable=True)
    except Exception as e:
        response = to_error_response(e)
        if response is None:
            logger.exception("Failed to create checkout")
            return error_response(500, "INTERNAL_ERROR", "Internal server error")
        return response
