from .catalog_repository import CatalogRepository as CatalogRepository
