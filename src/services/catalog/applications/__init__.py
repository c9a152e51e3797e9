from .catalog_admin_service import CatalogAdminService as CatalogAdminService
from .catalog_service import CatalogService as CatalogService
