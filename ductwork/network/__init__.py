from .diagnostics import WarningCode, DuctWarning

from .duct_system import (
    SectionResult,
    DuctCalculationResult,
    calculate_section,
    calculate_duct_system
)

from .project import DuctProject
