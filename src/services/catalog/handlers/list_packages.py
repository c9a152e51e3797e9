from aws_lambda_powertools import Logger
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.catalog.applications import CatalogService
from services.catalog.handlers.response_models import package_listing_data
from services.catalog.infrastructure import DynamoDBCatalogRepository
from services.shared.cache import TtlCache
from services.shared.config import Settings
from services.shared.domain import TenantId
from services.shared.utils import api_response, error_response, to_error_response
from services.shared.utils.aws import dynamodb_table

logger = Logger()

settings = Settings.from_env()
repository = DynamoDBCatalogRepository(dynamodb_table(settings))
cache = TtlCache(ttl_seconds=settings.catalog_cache_ttl_seconds)
service = CatalogService(repository=repository, cache=cache)


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_HTTP)
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """ストアフロントのパッケージ一覧 Lambda Handler"""
    path_params = event.path_parameters or {}
    query = event.query_string_parameters or {}

    try:
        tenant_id = TenantId(value=path_params.get("tenant_id", ""))
        segment_id = query.get("segment_id") or None
        logger.append_keys(tenant_id=str(tenant_id))

        packages = service.get_packages(tenant_id, segment_id=segment_id)
        return api_response(
            200,
            {
                "status": "success",
                "data": [package_listing_data(p).model_dump() for p in packages],
            },
        )
    except Exception as e:
        response = to_error_response(e)
        if response is None:
            logger.exception("Failed to list packages")
            return error_response(500, "INTERNAL_ERROR", "Internal server error")
        return response
