from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications import ExpirePendingBookingsService
from services.booking.infrastructure import DynamoDBBookingRepository
from services.shared.config import Settings
from services.shared.utils import TenantClock
from services.shared.utils.aws import dynamodb_table

logger = Logger()

settings = Settings.from_env()
clock = TenantClock(settings.default_timezone, settings.tenant_timezones)
service = ExpirePendingBookingsService(
    repository=DynamoDBBookingRepository(dynamodb_table(settings)),
    ttl_minutes=settings.pending_booking_ttl_minutes,
)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """支払い待ち予約の期限切れ処理（EventBridge スケジュール）"""
    expired = service.expire(now=clock.now())
    logger.info("Pending booking expiry finished", extra={"expired": expired})
    return {"expired": expired}
