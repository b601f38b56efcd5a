"""Cross-section geometry of duct sections.

Dimensions are expressed in inches, areas in square feet.
"""
from typing import Optional
from dataclasses import dataclass
import math
import numpy as np
from scipy.optimize import fsolve
from ductwork.model import DuctSection, DuctShape, SectionType
from ductwork.catalog import MaterialsCatalog, DEFAULT_MATERIALS_CATALOG
from ductwork.exceptions import InvalidGeometryError

SQ_IN_PER_SQ_FT = 144.0


@dataclass(frozen=True)
class SectionGeometry:
    """Clear interior geometry of a duct section, i.e. after subtracting the
    liner thickness from the nominal dimensions.

    Attributes
    ----------
    area_ft2:
        Flow area.
    characteristic_diameter_in:
        Diameter used in the friction calculation: the interior diameter of a
        round duct, or the equivalent diameter of a rectangular duct
        according to Huebscher.
    effective_width_in, effective_height_in: optional
        Interior width and height of a rectangular duct.
    effective_diameter_in: optional
        Interior diameter of a round duct.
    hydraulic_diameter_in:
        Hydraulic diameter (4 x area / perimeter).
    """
    area_ft2: float
    characteristic_diameter_in: float
    effective_width_in: Optional[float] = None
    effective_height_in: Optional[float] = None
    effective_diameter_in: Optional[float] = None
    hydraulic_diameter_in: float = 0.0


NO_GEOMETRY = SectionGeometry(area_ft2=0.0, characteristic_diameter_in=0.0)


def equivalent_diameter(width: float, height: float) -> float:
    """Returns the diameter of the round duct having the same friction loss
    and airflow as the rectangular duct with sides `width` and `height`
    (Huebscher).
    """
    return 1.30 * (width * height) ** 0.625 / (width + height) ** 0.25


def hydraulic_diameter(width: float, height: float) -> float:
    return 2.0 * width * height / (width + height)


def rectangular_height(equivalent_diameter_in: float, aspect_ratio: float) -> float:
    """Returns the height (in.) of the rectangular duct with aspect ratio
    `aspect_ratio` (width / height) that is equivalent to a round duct with
    diameter `equivalent_diameter_in` (in.).
    """
    r = aspect_ratio

    def eq(unknowns: np.ndarray) -> np.ndarray:
        h = unknowns[0]
        out = equivalent_diameter(r * h, h) - equivalent_diameter_in
        return np.array([out])

    roots = fsolve(eq, np.array([equivalent_diameter_in]))
    return float(roots[0])


def _round_geometry(section: DuctSection, liner_in: float) -> SectionGeometry:
    if section.diameter_in is None:
        raise InvalidGeometryError(f"round section '{section.id}' has no diameter")
    d = section.diameter_in - 2.0 * liner_in
    if d <= 0.0:
        raise InvalidGeometryError(
            f"round section '{section.id}' has no clear interior diameter "
            f"(diameter {section.diameter_in} in., liner {liner_in} in.)"
        )
    return SectionGeometry(
        area_ft2=math.pi * d ** 2 / (4.0 * SQ_IN_PER_SQ_FT),
        characteristic_diameter_in=d,
        effective_diameter_in=d,
        hydraulic_diameter_in=d
    )


def _rectangular_geometry(section: DuctSection, liner_in: float) -> SectionGeometry:
    if section.width_in is None or section.height_in is None:
        raise InvalidGeometryError(
            f"rectangular section '{section.id}' needs both width and height"
        )
    w = section.width_in - 2.0 * liner_in
    h = section.height_in - 2.0 * liner_in
    if w <= 0.0 or h <= 0.0:
        raise InvalidGeometryError(
            f"rectangular section '{section.id}' has no clear interior "
            f"dimensions ({section.width_in} x {section.height_in} in., "
            f"liner {liner_in} in.)"
        )
    return SectionGeometry(
        area_ft2=w * h / SQ_IN_PER_SQ_FT,
        characteristic_diameter_in=equivalent_diameter(w, h),
        effective_width_in=w,
        effective_height_in=h,
        hydraulic_diameter_in=hydraulic_diameter(w, h)
    )


def section_geometry(
    section: DuctSection,
    materials_catalog: Optional[MaterialsCatalog] = None
) -> SectionGeometry:
    """Returns the clear interior geometry of `section`.

    The liner reduces each interior dimension by twice the liner thickness
    found in `materials_catalog`. Equipment sections have no geometry
    (`NO_GEOMETRY`).

    Raises
    ------
    InvalidGeometryError
        If a dimension is missing, or if no clear interior dimension is left
        after subtracting the liner.
    """
    if section.section_type == SectionType.EQUIPMENT:
        return NO_GEOMETRY
    catalog = materials_catalog or DEFAULT_MATERIALS_CATALOG
    liner_in = catalog.get_liner(section.liner).thickness_in
    if section.shape == DuctShape.ROUND:
        return _round_geometry(section, liner_in)
    return _rectangular_geometry(section, liner_in)
