from .pint_setup import UNITS, Quantity

from .model import (
    SystemType,
    SectionType,
    DuctShape,
    DuctLiner,
    FlexInstall,
    DuctSystem,
    DuctSection,
    DuctFitting
)

from .exceptions import (
    DuctworkError,
    ComputationError,
    InvalidGeometryError,
    UnknownFittingError,
    ItemNotFoundError
)

from .settings import CalculationSettings, VelocityLimit, DEFAULT_SETTINGS

from .air import AirProperties, air_properties

from .catalog import (
    FittingsCatalog,
    MaterialsCatalog,
    DEFAULT_FITTINGS_CATALOG,
    DEFAULT_MATERIALS_CATALOG
)

from .network import (
    WarningCode,
    DuctWarning,
    SectionResult,
    DuctCalculationResult,
    calculate_section,
    calculate_duct_system,
    DuctProject
)

from .sizing import size_round_duct, rectangular_equivalents

from .utils import SystemCurve, estimate_fan_power
