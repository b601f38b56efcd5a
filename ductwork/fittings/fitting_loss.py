"""Pressure loss of duct fittings.

A fitting either has a loss coefficient C, so that its pressure loss is C
times the velocity pressure in the duct section, or it has a fixed pressure
drop that doesn't depend on the air velocity (terminals, coils, filters, ...).
"""
from typing import Optional, Sequence, Tuple
from dataclasses import dataclass
import numpy as np
from ductwork.model import DuctFitting
from ductwork.air import AirProperties, STANDARD_DENSITY
from ductwork.catalog import (
    FittingData,
    FittingMethod,
    FittingsCatalog,
    DEFAULT_FITTINGS_CATALOG
)
from ductwork.exceptions import UnknownFittingError

# velocity (fpm) of standard air with a velocity pressure of 1 in. w.c.
STANDARD_AIR_VELOCITY = 4005.0


@dataclass(frozen=True)
class FittingLoss:
    """Pressure loss of a fitting in a duct section.

    Attributes
    ----------
    fitting_id:
        ID of the fitting.
    fitting_type:
        Key of the fitting in the fittings catalog.
    method:
        Method used to determine the pressure loss; `None` if the fitting
        type is unknown.
    coefficient:
        Loss coefficient that was applied (C_COEFFICIENT method only).
    loss_per_unit_in_wc:
        Pressure loss of a single fitting.
    quantity:
        Number of identical fittings.
    loss_in_wc:
        Pressure loss of all the fittings together.
    """
    fitting_id: str
    fitting_type: str
    method: Optional[FittingMethod]
    coefficient: Optional[float]
    loss_per_unit_in_wc: float
    quantity: int
    loss_in_wc: float


def velocity_pressure_in_wc(velocity_fpm: float, air: Optional[AirProperties] = None) -> float:
    """Returns the velocity pressure (in. w.c.) of air flowing at
    `velocity_fpm`. If `air` is given, the velocity pressure of standard air
    is corrected for the actual air density.
    """
    vp = (velocity_fpm / STANDARD_AIR_VELOCITY) ** 2
    if air is not None:
        vp *= air.density_lb_ft3 / STANDARD_DENSITY
    return vp


def _interpolate(x: float, table: Sequence[Tuple[float, float]]) -> float:
    # values outside the table are clamped to the first or last entry
    xs, ys = zip(*table)
    return float(np.interp(x, xs, ys))


def resolve_coefficient(fitting: DuctFitting, data: FittingData) -> float:
    """Returns the loss coefficient that applies to `fitting`.

    The loss coefficient is selected in this order:
    1. The coefficient override of the fitting.
    2. The coefficient that corresponds with the damper position, radius
       ratio or turning vanes of the fitting, if the catalog entry has a
       table for it.
    3. The base coefficient of the catalog entry.
    """
    if fitting.coefficient_override is not None:
        return fitting.coefficient_override
    if fitting.damper_position_pct is not None and data.damper_position_table:
        return _interpolate(fitting.damper_position_pct, data.damper_position_table)
    if fitting.radius_ratio is not None and data.radius_ratio_table:
        return _interpolate(fitting.radius_ratio, data.radius_ratio_table)
    if fitting.has_turning_vanes is not None and data.vanes_table:
        vanes = dict(data.vanes_table)
        if bool(fitting.has_turning_vanes) in vanes:
            return vanes[bool(fitting.has_turning_vanes)]
    return data.coefficient if data.coefficient is not None else 0.0


def fitting_loss_in_wc(
    fitting: DuctFitting,
    velocity_fpm: float,
    air: AirProperties,
    catalog: Optional[FittingsCatalog] = None
) -> FittingLoss:
    """Returns the pressure loss of `fitting` in a duct section with mean air
    velocity `velocity_fpm`.

    Parameters
    ----------
    fitting:
        The fitting instance in the duct section.
    velocity_fpm:
        Mean air velocity in the duct section.
    air:
        Air properties at the conditions of the duct system.
    catalog: optional
        Fittings catalog. If None, the default catalog of the package is
        used.

    Raises
    ------
    UnknownFittingError
        If the fitting type is not in the catalog.
    """
    catalog = catalog or DEFAULT_FITTINGS_CATALOG
    data = catalog.get(fitting.fitting_type)
    if data is None:
        raise UnknownFittingError(
            f"fitting type '{fitting.fitting_type}' of fitting "
            f"'{fitting.id}' is not in the fittings catalog"
        )
    if data.method == FittingMethod.FIXED_DP:
        coefficient = None
        if fitting.fixed_dp_override is not None:
            loss = fitting.fixed_dp_override
        else:
            loss = data.default_dp if data.default_dp is not None else 0.0
    else:
        coefficient = resolve_coefficient(fitting, data)
        loss = coefficient * velocity_pressure_in_wc(velocity_fpm, air)
    return FittingLoss(
        fitting_id=fitting.id,
        fitting_type=fitting.fitting_type,
        method=data.method,
        coefficient=coefficient,
        loss_per_unit_in_wc=loss,
        quantity=fitting.quantity,
        loss_in_wc=loss * fitting.quantity
    )
