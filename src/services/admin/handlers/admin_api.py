from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import (
    APIGatewayHttpResolver,
    Response,
    content_types,
)
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from botocore.exceptions import ClientError

from services.admin.handlers.request_models import (
    CreateAddOnRequest,
    CreateBlackoutRequest,
    CreatePackageRequest,
    UpdateAddOnRequest,
    UpdatePackageRequest,
)
from services.availability.applications import BlackoutService
from services.availability.domain.entity import Blackout
from services.availability.infrastructure import DynamoDBBlackoutRepository
from services.booking.applications import BookingQueryService
from services.booking.domain.value_object import BookingId
from services.booking.handlers.response_models import booking_data
from services.booking.infrastructure import DynamoDBBookingRepository
from services.catalog.applications import CatalogAdminService, CatalogService
from services.catalog.domain.factory import CatalogFactory
from services.catalog.domain.value_object import AddOnId, PackageId
from services.catalog.handlers.response_models import (
    admin_add_on_data,
    admin_package_data,
)
from services.catalog.infrastructure import DynamoDBCatalogRepository
from services.shared.cache import TtlCache
from services.shared.config import Settings
from services.shared.domain import Currency, DomainException, EventDate, TenantId
from services.shared.utils import error_response, to_error_response
from services.shared.utils.aws import dynamodb_table

logger = Logger()
app = APIGatewayHttpResolver()

settings = Settings.from_env()
table = dynamodb_table(settings)
catalog_repository = DynamoDBCatalogRepository(table)
catalog = CatalogService(
    repository=catalog_repository,
    cache=TtlCache(ttl_seconds=settings.catalog_cache_ttl_seconds),
)
catalog_admin = CatalogAdminService(
    repository=catalog_repository,
    factory=CatalogFactory(currency=Currency(settings.currency)),
    catalog=catalog,
)
blackouts = BlackoutService(repository=DynamoDBBlackoutRepository(table))
bookings = BookingQueryService(repository=DynamoDBBookingRepository(table))


def _success(data, status_code: int = 200) -> tuple[dict, int]:
    return {"status": "success", "data": data}, status_code


def _body() -> dict:
    return app.current_event.json_body or {}


def _blackout_data(blackout: Blackout) -> dict:
    return {
        "blackout_id": str(blackout.id),
        "date": str(blackout.date),
        "reason": blackout.reason,
    }


@app.exception_handler([ValueError, DomainException])
def handle_domain_error(e: Exception) -> Response:
    response = to_error_response(e)
    if response is None:
        logger.exception("Unhandled admin API error")
        response = error_response(500, "INTERNAL_ERROR", "Internal server error")
    return Response(
        status_code=response["statusCode"],
        content_type=content_types.APPLICATION_JSON,
        body=response["body"],
    )


@app.exception_handler(ClientError)
def handle_storage_error(e: ClientError) -> Response:
    """ストアの一時的な失敗（同時書き込みの競合など）は再試行可能として返す"""
    logger.exception(
        "Storage error in admin API",
        extra={"error_code": e.response["Error"]["Code"]},
    )
    response = error_response(
        503, "STORAGE_UNAVAILABLE", "Storage temporarily unavailable", retryable=True
    )
    return Response(
        status_code=response["statusCode"],
        content_type=content_types.APPLICATION_JSON,
        body=response["body"],
    )


@app.get("/admin/tenants/<tenant_id>/catalog")
def list_catalog(tenant_id: str):
    packages, add_ons = catalog_admin.list_all(TenantId(value=tenant_id))
    return _success(
        {
            "packages": [admin_package_data(p).model_dump() for p in packages],
            "add_ons": [admin_add_on_data(a).model_dump() for a in add_ons],
        }
    )


@app.post("/admin/tenants/<tenant_id>/packages")
def create_package(tenant_id: str):
    request = CreatePackageRequest.model_validate(_body())
    package = catalog_admin.create_package(
        TenantId(value=tenant_id),
        {
            "slug": request.slug,
            "title": request.title,
            "description": request.description,
            "price": request.price,
            "active": request.active,
            "segment_id": request.segment_id,
        },
    )
    return _success(admin_package_data(package).model_dump(), 201)


@app.patch("/admin/tenants/<tenant_id>/packages/<package_id>")
def update_package(tenant_id: str, package_id: str):
    request = UpdatePackageRequest.model_validate(_body())
    changes = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key == "segment_id"
    }
    package = catalog_admin.update_package(
        TenantId(value=tenant_id), PackageId(value=package_id), changes
    )
    return _success(admin_package_data(package).model_dump())


@app.delete("/admin/tenants/<tenant_id>/packages/<package_id>")
def delete_package(tenant_id: str, package_id: str):
    catalog_admin.delete_package(TenantId(value=tenant_id), PackageId(value=package_id))
    return _success({"package_id": package_id})


@app.post("/admin/tenants/<tenant_id>/add-ons")
def create_add_on(tenant_id: str):
    request = CreateAddOnRequest.model_validate(_body())
    add_on = catalog_admin.create_add_on(
        TenantId(value=tenant_id),
        {
            "title": request.title,
            "price": request.price,
            "package_id": request.package_id,
            "active": request.active,
        },
    )
    return _success(admin_add_on_data(add_on).model_dump(), 201)


@app.patch("/admin/tenants/<tenant_id>/add-ons/<add_on_id>")
def update_add_on(tenant_id: str, add_on_id: str):
    request = UpdateAddOnRequest.model_validate(_body())
    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    add_on = catalog_admin.update_add_on(
        TenantId(value=tenant_id), AddOnId(value=add_on_id), changes
    )
    return _success(admin_add_on_data(add_on).model_dump())


@app.delete("/admin/tenants/<tenant_id>/add-ons/<add_on_id>")
def delete_add_on(tenant_id: str, add_on_id: str):
    catalog_admin.delete_add_on(TenantId(value=tenant_id), AddOnId(value=add_on_id))
    return _success({"add_on_id": add_on_id})


@app.get("/admin/tenants/<tenant_id>/blackouts")
def list_blackouts(tenant_id: str):
    items = blackouts.list(TenantId(value=tenant_id))
    return _success([_blackout_data(b) for b in items])


@app.post("/admin/tenants/<tenant_id>/blackouts")
def add_blackout(tenant_id: str):
    request = CreateBlackoutRequest.model_validate(_body())
    blackout = blackouts.add(
        TenantId(value=tenant_id), EventDate(request.date), request.reason
    )
    return _success(_blackout_data(blackout), 201)


@app.delete("/admin/tenants/<tenant_id>/blackouts/<date>")
def remove_blackout(tenant_id: str, date: str):
    blackouts.remove(TenantId(value=tenant_id), EventDate.from_string(date))
    return _success({"date": date})


@app.get("/admin/tenants/<tenant_id>/bookings")
def list_bookings(tenant_id: str):
    items = bookings.list_bookings(TenantId(value=tenant_id))
    return _success([booking_data(b) for b in items])


@app.get("/admin/tenants/<tenant_id>/bookings/<booking_id>")
def get_booking(tenant_id: str, booking_id: str):
    booking = bookings.get_booking(TenantId(value=tenant_id), BookingId(value=booking_id))
    return _success(booking_data(booking))


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_HTTP)
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """管理 API Lambda Handler（カタログ・ブラックアウト・予約）"""
    return app.resolve(event, context)
