from .entity import AddOn as AddOn
from .entity import Package as Package
from .factory import CatalogFactory as CatalogFactory
from .repository import CatalogRepository as CatalogRepository
from .value_object import AddOnId as AddOnId
from .value_object import PackageId as PackageId
from .value_object import PackageSlug as PackageSlug
