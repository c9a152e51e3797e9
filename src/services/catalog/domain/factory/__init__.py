from .catalog_factory import AddOnDetails as AddOnDetails
from .catalog_factory import CatalogFactory as CatalogFactory
from .catalog_factory import PackageDetails as PackageDetails
