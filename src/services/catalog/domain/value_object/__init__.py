from .add_on_id import AddOnId as AddOnId
from .package_id import PackageId as PackageId
from .package_slug import PackageSlug as PackageSlug
