"""Duct sizing with the equal friction method ("ductulator").

For a given airflow and friction rate the required diameter of a round duct
is calculated. The round duct is rounded up to a standard size and converted
to rectangular ducts of equal friction loss with different aspect ratios.
"""
from typing import Optional, List, Sequence, Union
from dataclasses import dataclass
import math
from ductwork import Quantity
from ductwork.model import DuctLiner
from ductwork.catalog import MaterialsCatalog, DEFAULT_MATERIALS_CATALOG
from ductwork.conduit import equivalent_diameter, rectangular_height
from ductwork.schedule import DuctSchedule, round_duct_schedule, rectangular_duct_schedule

Q_ = Quantity

# friction chart of galvanized ducts with standard air:
# Δp (in. w.c. per 100 ft) = 0.109136 * cfm ** 1.9 / D ** 5.02
FRICTION_CHART_COEFFICIENT = 0.109136
FRICTION_CHART_FLOW_EXPONENT = 1.9
FRICTION_CHART_DIAMETER_EXPONENT = 5.02

DEFAULT_ASPECT_RATIOS = (1.0, 1.5, 2.0, 2.5, 3.0, 4.0)


@dataclass(frozen=True)
class RoundDuctSize:
    """Selected round duct.

    Attributes
    ----------
    calculated_diameter_in:
        Clear interior diameter required for the friction rate.
    nominal_diameter_in:
        Standard duct size, including the liner.
    interior_diameter_in:
        Clear interior diameter of the standard size.
    area_ft2:
        Flow area of the standard size.
    velocity_fpm:
        Air velocity in the standard size.
    """
    calculated_diameter_in: float
    nominal_diameter_in: float
    interior_diameter_in: float
    area_ft2: float
    velocity_fpm: float


@dataclass(frozen=True)
class RectangularDuctSize:
    """Rectangular duct equivalent to a round duct.

    Attributes
    ----------
    aspect_ratio:
        Requested ratio of width to height.
    width_in, height_in:
        Standard sizes, including the liner.
    equivalent_diameter_in:
        Equivalent diameter of the clear interior of the standard size.
    area_ft2:
        Clear flow area.
    velocity_fpm:
        Air velocity.
    """
    aspect_ratio: float
    width_in: float
    height_in: float
    equivalent_diameter_in: float
    area_ft2: float
    velocity_fpm: float

    @property
    def label(self) -> str:
        return f"{self.aspect_ratio:g}:1"


def _liner_thickness(liner: Union[DuctLiner, str], catalog: Optional[MaterialsCatalog]) -> float:
    catalog = catalog or DEFAULT_MATERIALS_CATALOG
    return catalog.get_liner(DuctLiner(liner)).thickness_in


def required_diameter(cfm: float, friction_rate: float) -> float:
    """Returns the diameter (in.) of the round duct that carries `cfm` with a
    friction loss of `friction_rate` (in. w.c. per 100 ft).
    """
    if cfm <= 0.0:
        raise ValueError(f"airflow must be positive, got {cfm} CFM")
    if friction_rate <= 0.0:
        raise ValueError(f"friction rate must be positive, got {friction_rate}")
    a = FRICTION_CHART_COEFFICIENT * cfm ** FRICTION_CHART_FLOW_EXPONENT / friction_rate
    return a ** (1.0 / FRICTION_CHART_DIAMETER_EXPONENT)


def size_round_duct(
    cfm: float,
    friction_rate: float = 0.08,
    liner: Union[DuctLiner, str] = DuctLiner.NONE,
    schedule: Optional[DuctSchedule] = None,
    materials_catalog: Optional[MaterialsCatalog] = None
) -> RoundDuctSize:
    """Sizes a round duct for `cfm` at the given friction rate.

    Parameters
    ----------
    cfm:
        Airflow through the duct.
    friction_rate:
        Design friction loss in in. w.c. per 100 ft. Usual values are 0.05 to
        0.08 for low velocity systems and 0.08 to 0.15 for medium and high
        velocity systems.
    liner:
        Liner inside the duct. The nominal size must accommodate the liner
        on top of the required clear diameter.
    schedule: optional
        Schedule of standard round duct sizes. If None, the default round
        duct schedule is used.
    materials_catalog: optional
        Catalog with the liner thicknesses.

    Returns
    -------
    RoundDuctSize

    Raises
    ------
    ValueError
        If the airflow or friction rate is not positive.
    """
    schedule = schedule or round_duct_schedule
    t = _liner_thickness(liner, materials_catalog)
    d_calc = required_diameter(cfm, friction_rate)
    d_req = d_calc + 2.0 * t
    d_nom = schedule.get_next_larger_size(Q_(d_req, 'inch'))
    d_nom = d_nom.to('inch').magnitude if d_nom is not None else d_req
    d_int = d_nom - 2.0 * t
    area = math.pi * d_int ** 2 / (4.0 * 144.0)
    return RoundDuctSize(
        calculated_diameter_in=d_calc,
        nominal_diameter_in=d_nom,
        interior_diameter_in=d_int,
        area_ft2=area,
        velocity_fpm=cfm / area
    )


def _standard_side(size: float, schedule: DuctSchedule) -> float:
    side = schedule.get_next_larger_size(Q_(size, 'inch'))
    if side is None:
        # beyond the schedule: next even inch
        return 2.0 * math.ceil(size / 2.0)
    return side.to('inch').magnitude


def rectangular_equivalents(
    cfm: float,
    diameter_in: float,
    liner: Union[DuctLiner, str] = DuctLiner.NONE,
    aspect_ratios: Sequence[float] = DEFAULT_ASPECT_RATIOS,
    schedule: Optional[DuctSchedule] = None,
    materials_catalog: Optional[MaterialsCatalog] = None
) -> List[RectangularDuctSize]:
    """Returns rectangular ducts with the same friction loss as a round duct
    with clear interior diameter `diameter_in`, one for each aspect ratio
    (width / height) in `aspect_ratios`, sorted by increasing velocity.

    The width and height are rounded up to standard sizes that include the
    liner; the equivalent diameter, area and velocity are those of the clear
    interior of the standard size.
    """
    if cfm <= 0.0:
        raise ValueError(f"airflow must be positive, got {cfm} CFM")
    if diameter_in <= 0.0:
        raise ValueError(f"diameter must be positive, got {diameter_in} in.")
    schedule = schedule or rectangular_duct_schedule
    t = _liner_thickness(liner, materials_catalog)
    sizes = []
    for r in aspect_ratios:
        if r <= 0.0:
            raise ValueError(f"aspect ratio must be positive, got {r}")
        h = rectangular_height(diameter_in, r)
        w = r * h
        w_nom = _standard_side(w + 2.0 * t, schedule)
        h_nom = _standard_side(h + 2.0 * t, schedule)
        w_int = w_nom - 2.0 * t
        h_int = h_nom - 2.0 * t
        area = w_int * h_int / 144.0
        sizes.append(RectangularDuctSize(
            aspect_ratio=r,
            width_in=w_nom,
            height_in=h_nom,
            equivalent_diameter_in=equivalent_diameter(w_int, h_int),
            area_ft2=area,
            velocity_fpm=cfm / area
        ))
    sizes.sort(key=lambda s: s.velocity_fpm)
    return sizes
