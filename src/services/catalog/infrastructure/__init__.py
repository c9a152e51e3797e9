from .dynamodb_catalog_repository import (
    DynamoDBCatalogRepository as DynamoDBCatalogRepository,
)
