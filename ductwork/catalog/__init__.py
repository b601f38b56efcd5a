from .materials import (
    MaterialData,
    LinerData,
    MaterialsCatalog,
    NO_LINER,
    DEFAULT_MATERIALS_CATALOG
)

from .fittings import (
    FittingCategory,
    FittingMethod,
    FittingData,
    FittingsCatalog,
    DEFAULT_FITTINGS_CATALOG
)
