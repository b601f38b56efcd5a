"""Friction loss of straight and flexible duct sections (Darcy-Weisbach).

Air velocities are expressed in fpm, diameters in inches, the air density in
lb/ft³ and pressure losses in inches of water column.
"""
from typing import Optional, Callable, Dict
from dataclasses import dataclass
import math
from ductwork.model import DuctSection, SectionType, DuctLiner
from ductwork.air import AirProperties
from ductwork.catalog import MaterialsCatalog, DEFAULT_MATERIALS_CATALOG
from ductwork.catalog.materials import NO_LINER
from ductwork.settings import CalculationSettings, DEFAULT_SETTINGS
from .cross_section import SectionGeometry

GC = 32.174                # lbm.ft / (lbf.s²)
LBF_FT2_PER_IN_WC = 5.202  # lbf/ft² per in. w.c.
FLEX_MATERIAL = 'flex'


@dataclass(frozen=True)
class FrictionLoss:
    loss_in_wc: float = 0.0
    reynolds_number: float = 0.0
    friction_factor: float = 0.0


def velocity_fpm(cfm: float, area_ft2: float) -> float:
    """Returns the mean air velocity in fpm. A section without flow area has
    no velocity.
    """
    if area_ft2 <= 0.0:
        return 0.0
    return cfm / area_ft2


def reynolds_number(velocity_fpm: float, diameter_in: float, air: AirProperties) -> float:
    """Returns the Reynolds number of the airflow in a duct with the given
    characteristic diameter (in.).
    """
    v = velocity_fpm / 60.0
    D = diameter_in / 12.0
    return air.density_lb_ft3 * v * D / air.viscosity_lb_ft_s


def _swamee_jain(Re: float, e: float) -> float:
    """Darcy friction factor acc. to correlation of Swamee and Jain."""
    return 0.25 / math.log10(e / 3.7 + 5.74 / Re ** 0.9) ** 2


def _haaland(Re: float, e: float) -> float:
    """Darcy friction factor acc. to correlation of Haaland."""
    return (-1.8 * math.log10((e / 3.7) ** 1.11 + 6.9 / Re)) ** -2


def _churchill(Re: float, e: float) -> float:
    """Darcy friction factor acc. to correlation of Churchill."""
    d = (7 / Re) ** 0.9 + 0.27 * e
    A = (2.457 * math.log(1 / d)) ** 16
    B = (37.530 / Re) ** 16
    f = 8 * ((8 / Re) ** 12 + 1 / (A + B) ** 1.5) ** (1 / 12)
    return f


def _serghide(Re: float, e: float) -> float:
    """Darcy friction factor acc. to correlation of Serghide."""
    f1 = -2.0 * math.log10(e / 3.7 + 12.0 / Re)
    f2 = -2.0 * math.log10(e / 3.7 + 2.51 * f1 / Re)
    f3 = -2.0 * math.log10(e / 3.7 + 2.51 * f2 / Re)
    f = (f1 - (f2 - f1) ** 2.0 / (f3 - 2.0 * f2 + f1)) ** -2.0
    return f


_CORRELATIONS: Dict[str, Callable[[float, float], float]] = {
    'swamee_jain': _swamee_jain,
    'haaland': _haaland,
    'churchill': _churchill,
    'serghide': _serghide
}


def darcy_friction_factor(
    Re: float,
    relative_roughness: float,
    settings: Optional[CalculationSettings] = None
) -> float:
    """Returns the Darcy friction factor that corresponds with the given
    Reynolds number `Re` and relative wall roughness `relative_roughness`
    (absolute roughness / diameter).

    Below the laminar Reynolds limit of `settings` the friction factor of
    laminar flow (64 / Re) is returned. Above it the explicit correlation
    selected in `settings` is used.
    """
    settings = settings or DEFAULT_SETTINGS
    if Re <= 0.0:
        # no flow means no friction
        return 0.0
    if Re < settings.laminar_reynolds_limit:
        return 64.0 / Re
    correlation = _CORRELATIONS[settings.friction_correlation]
    return correlation(Re, relative_roughness)


def section_roughness(
    section: DuctSection,
    materials_catalog: Optional[MaterialsCatalog] = None
) -> Optional[float]:
    """Returns the absolute roughness (ft) of the inner surface of `section`.

    A lined section takes the roughness of the liner surface. A flexible duct
    section takes the roughness of the flexible duct material. Otherwise the
    roughness of the section material applies. Returns `None` if the
    material that applies is not in the catalog.
    """
    catalog = materials_catalog or DEFAULT_MATERIALS_CATALOG
    if section.liner != DuctLiner.NONE:
        liner = catalog.get_liner(section.liner)
        if liner is not NO_LINER and liner.roughness_ft is not None:
            return liner.roughness_ft
    if section.section_type == SectionType.FLEX:
        material = catalog.get_material(FLEX_MATERIAL)
    else:
        material = catalog.get_material(section.material)
    if material is None:
        return None
    return material.roughness_ft


def friction_loss_in_wc(
    section: DuctSection,
    velocity_fpm: float,
    air: AirProperties,
    geometry: SectionGeometry,
    roughness_ft: float,
    settings: Optional[CalculationSettings] = None
) -> FrictionLoss:
    """Returns the friction loss along the length of a straight or flexible
    duct section.

    Parameters
    ----------
    section:
        The duct section.
    velocity_fpm:
        Mean air velocity in the section.
    air:
        Air properties at the conditions of the duct system.
    geometry:
        Clear interior geometry of the section.
    roughness_ft:
        Absolute roughness of the inner duct surface.
    settings: optional
        Calculation settings. Determines the friction factor correlation and
        the install condition of flexible ducts that don't specify one.

    Returns
    -------
    FrictionLoss
        Friction loss in in. w.c., together with the Reynolds number and
        Darcy friction factor. Equipment sections, sections without flow
        and sections without length have no friction loss.

    Notes
    -----
    Δp = f * (L / D) * ρ * v² / (2 * gc), with v in ft/s and D the
    characteristic diameter of the section in ft. The result in lbf/ft² is
    converted to in. w.c. Flexible ducts multiply the friction loss of the
    fully extended duct with the correction factor of their install
    condition.
    """
    settings = settings or DEFAULT_SETTINGS
    D_in = geometry.characteristic_diameter_in
    if section.section_type == SectionType.EQUIPMENT or velocity_fpm <= 0.0 or D_in <= 0.0:
        return FrictionLoss()
    D = D_in / 12.0
    v = velocity_fpm / 60.0
    rho = air.density_lb_ft3
    Re = reynolds_number(velocity_fpm, D_in, air)
    f = darcy_friction_factor(Re, roughness_ft / D, settings)
    dp = f * (section.length_ft / D) * rho * v ** 2 / (2.0 * GC)
    dp /= LBF_FT2_PER_IN_WC
    if section.section_type == SectionType.FLEX:
        install = section.flex_install if section.flex_install is not None else settings.default_flex_install
        dp *= install.correction_factor
    return FrictionLoss(loss_in_wc=dp, reynolds_number=Re, friction_factor=f)
