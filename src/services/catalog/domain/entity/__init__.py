from .add_on import AddOn as AddOn
from .package import Package as Package
