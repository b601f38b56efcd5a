"""Pressure-drop calculation of a duct system.

A duct system is a single series flow path: its sections are traversed in
the order of their `sort_order` and the pressure losses of the sections are
added up. The function `calculate_duct_system` returns a
`DuctCalculationResult` with the losses of each section and of the system as
a whole, together with the warnings about the design.
"""
from typing import Optional, Sequence, List, Tuple, Iterable
from dataclasses import dataclass, field
from collections import Counter
import pandas as pd
from ductwork import Quantity
from ductwork.model import DuctSystem, DuctSection, SectionType, DuctFitting
from ductwork.air import AirProperties, air_properties
from ductwork.catalog import (
    FittingsCatalog,
    MaterialsCatalog,
    DEFAULT_FITTINGS_CATALOG,
    DEFAULT_MATERIALS_CATALOG
)
from ductwork.conduit import (
    SectionGeometry,
    NO_GEOMETRY,
    section_geometry,
    velocity_fpm,
    section_roughness,
    friction_loss_in_wc
)
from ductwork.conduit.friction import FLEX_MATERIAL
from ductwork.fittings import FittingLoss, velocity_pressure_in_wc, fitting_loss_in_wc
from ductwork.settings import CalculationSettings, DEFAULT_SETTINGS
from ductwork.exceptions import ComputationError, InvalidGeometryError, UnknownFittingError
from ductwork.logging import ModuleLogger
from .diagnostics import WarningCode, DuctWarning

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)
logger.setLevel(ModuleLogger.WARNING)


@dataclass(frozen=True)
class SectionResult:
    """Calculation result of a single duct section. Pressures are expressed
    in in. w.c.

    Attributes
    ----------
    straight_loss_in_wc:
        Friction loss of a straight or flexible duct section, or the fixed
        pressure drop of an equipment section.
    fittings_loss_in_wc:
        Sum of the pressure losses of the fittings in the section.
    total_loss_in_wc:
        Sum of the straight loss and the fittings loss.
    fitting_losses:
        Pressure loss of each fitting in the section.
    warnings:
        Warnings about this section.
    """
    section_id: str
    name: str
    section_type: SectionType
    sort_order: int
    cfm: float
    area_ft2: float = 0.0
    characteristic_diameter_in: float = 0.0
    hydraulic_diameter_in: float = 0.0
    velocity_fpm: float = 0.0
    velocity_pressure_in_wc: float = 0.0
    reynolds_number: float = 0.0
    friction_factor: float = 0.0
    straight_loss_in_wc: float = 0.0
    fittings_loss_in_wc: float = 0.0
    total_loss_in_wc: float = 0.0
    fitting_losses: Tuple[FittingLoss, ...] = ()
    warnings: Tuple[DuctWarning, ...] = ()


@dataclass(frozen=True)
class DuctCalculationResult:
    """Calculation result of a duct system. Pressures are expressed in in.
    w.c.

    The result is derived from the system and its sections and is never
    updated afterwards: when the inputs change, a new result must be
    calculated.

    Attributes
    ----------
    system_id:
        ID of the duct system.
    sections:
        Results of the sections in flow path order.
    total_straight_duct_loss:
        Sum of the straight losses of all sections.
    total_fittings_loss:
        Sum of the fittings losses of all sections.
    subtotal_loss:
        Sum of the straight and fittings losses.
    safety_factor_in_wc:
        Margin added to the subtotal loss.
    safety_factor_percent:
        Safety factor of the system in percent.
    total_system_loss:
        Subtotal loss plus margin: the static pressure the fan must deliver.
    max_velocity_fpm:
        Highest air velocity in the sections (0 if no section has airflow).
    air_properties:
        Air properties used in the calculation.
    warnings:
        Warnings about the system and its sections.
    """
    system_id: str
    sections: Tuple[SectionResult, ...]
    total_straight_duct_loss: float
    total_fittings_loss: float
    subtotal_loss: float
    safety_factor_in_wc: float
    safety_factor_percent: float
    total_system_loss: float
    max_velocity_fpm: float
    air_properties: AirProperties
    altitude_ft: float
    temperature_f: float
    total_cfm: float
    warnings: Tuple[DuctWarning, ...] = field(default_factory=tuple)

    @property
    def total_pressure_loss(self) -> Quantity:
        """Get the total system loss as a `Quantity` object."""
        return Q_(self.total_system_loss, 'in_wc')

    def get_section(self, section_id: str) -> Optional[SectionResult]:
        return next((s for s in self.sections if s.section_id == section_id), None)

    def get_warnings(self, code: Optional[WarningCode] = None) -> List[DuctWarning]:
        """Returns the warnings of the calculation, optionally only those
        with the given `code`.
        """
        if code is None:
            return list(self.warnings)
        return [w for w in self.warnings if w.code == code]

    def get_section_table(self, pressure_unit: str = 'in_wc') -> pd.DataFrame:
        """Returns a Pandas DataFrame object with an overview of the sections
        in flow path order, with the pressures expressed in the given
        pressure unit.
        """
        headers = [
            'section ID',
            'name',
            'type',
            'CFM',
            'area [ft²]',
            'D [in]',
            'velocity [fpm]',
            f'Pv [{pressure_unit}]',
            'Re',
            'f',
            f'Δp-straight [{pressure_unit}]',
            f'Δp-fittings [{pressure_unit}]',
            f'Δp-total [{pressure_unit}]'
        ]
        table = {header: [] for header in headers}
        for s in self.sections:
            table[headers[0]].append(s.section_id)
            table[headers[1]].append(s.name)
            table[headers[2]].append(s.section_type.value)
            table[headers[3]].append(s.cfm)
            table[headers[4]].append(s.area_ft2)
            table[headers[5]].append(s.characteristic_diameter_in)
            table[headers[6]].append(s.velocity_fpm)
            table[headers[7]].append(_convert(s.velocity_pressure_in_wc, pressure_unit))
            table[headers[8]].append(s.reynolds_number)
            table[headers[9]].append(s.friction_factor)
            table[headers[10]].append(_convert(s.straight_loss_in_wc, pressure_unit))
            table[headers[11]].append(_convert(s.fittings_loss_in_wc, pressure_unit))
            table[headers[12]].append(_convert(s.total_loss_in_wc, pressure_unit))
        return pd.DataFrame(table)

    def get_fitting_table(self, pressure_unit: str = 'in_wc') -> pd.DataFrame:
        """Returns a Pandas DataFrame object with an overview of all the
        fittings in the system, with the pressure losses expressed in the
        given pressure unit.
        """
        headers = [
            'section ID',
            'fitting ID',
            'fitting type',
            'C',
            'quantity',
            f'Δp-unit [{pressure_unit}]',
            f'Δp [{pressure_unit}]'
        ]
        table = {header: [] for header in headers}
        for s in self.sections:
            for fl in s.fitting_losses:
                table[headers[0]].append(s.section_id)
                table[headers[1]].append(fl.fitting_id)
                table[headers[2]].append(fl.fitting_type)
                table[headers[3]].append(fl.coefficient)
                table[headers[4]].append(fl.quantity)
                table[headers[5]].append(_convert(fl.loss_per_unit_in_wc, pressure_unit))
                table[headers[6]].append(_convert(fl.loss_in_wc, pressure_unit))
        return pd.DataFrame(table)


def _convert(pressure_in_wc: float, pressure_unit: str) -> float:
    return Q_(pressure_in_wc, 'in_wc').to(pressure_unit).magnitude


def _fmt(value: float) -> str:
    return f"{value:,.0f}"


def _equipment_pressure_drop(
    section: DuctSection,
    fittings_catalog: FittingsCatalog,
    warnings: List[DuctWarning]
) -> float:
    if section.fixed_pressure_drop is not None:
        return section.fixed_pressure_drop
    data = fittings_catalog.get(section.equipment_type) if section.equipment_type else None
    if data is not None and data.default_dp is not None:
        return data.default_dp
    warnings.append(DuctWarning(
        WarningCode.UNKNOWN_EQUIPMENT,
        f"Equipment section '{section.name or section.id}' has no pressure "
        f"drop and equipment type '{section.equipment_type}' is not in the "
        f"fittings catalog; its pressure drop is taken as zero",
        section.id
    ))
    return 0.0


def _fittings_loss(
    fittings: Iterable[DuctFitting],
    section: DuctSection,
    velocity: float,
    air: AirProperties,
    fittings_catalog: FittingsCatalog,
    warnings: List[DuctWarning]
) -> List[FittingLoss]:
    losses = []
    for fitting in fittings:
        try:
            losses.append(fitting_loss_in_wc(fitting, velocity, air, fittings_catalog))
        except UnknownFittingError:
            warnings.append(DuctWarning(
                WarningCode.UNKNOWN_FITTING,
                f"Fitting type '{fitting.fitting_type}' in section "
                f"'{section.name or section.id}' is not in the fittings "
                f"catalog; its pressure loss is taken as zero",
                section.id
            ))
            losses.append(FittingLoss(
                fitting_id=fitting.id,
                fitting_type=fitting.fitting_type,
                method=None,
                coefficient=None,
                loss_per_unit_in_wc=0.0,
                quantity=fitting.quantity,
                loss_in_wc=0.0
            ))
    return losses


def calculate_section(
    section: DuctSection,
    air: AirProperties,
    fittings_catalog: Optional[FittingsCatalog] = None,
    materials_catalog: Optional[MaterialsCatalog] = None,
    settings: Optional[CalculationSettings] = None
) -> SectionResult:
    """Calculates the pressure loss of a single duct section.

    Conditions that prevent a correct calculation (missing dimensions,
    unknown catalog keys, no airflow) don't raise an exception; the
    section then contributes zero to the affected loss and the
    `SectionResult` carries a warning.
    """
    fittings_catalog = fittings_catalog or DEFAULT_FITTINGS_CATALOG
    materials_catalog = materials_catalog or DEFAULT_MATERIALS_CATALOG
    settings = settings or DEFAULT_SETTINGS
    label = section.name or section.id
    warnings: List[DuctWarning] = []

    if section.cfm <= 0.0:
        warnings.append(DuctWarning(
            WarningCode.INVALID_AIRFLOW,
            f"Section '{label}' has no airflow ({section.cfm} CFM); it is "
            f"excluded from the pressure loss calculation",
            section.id
        ))
        return SectionResult(
            section_id=section.id,
            name=section.name,
            section_type=section.section_type,
            sort_order=section.sort_order,
            cfm=section.cfm,
            warnings=tuple(warnings)
        )

    geometry: SectionGeometry = NO_GEOMETRY
    velocity = 0.0
    reynolds_number = 0.0
    friction_factor = 0.0
    if section.section_type == SectionType.EQUIPMENT:
        straight_loss = _equipment_pressure_drop(section, fittings_catalog, warnings)
    else:
        try:
            geometry = section_geometry(section, materials_catalog)
        except InvalidGeometryError as err:
            warnings.append(DuctWarning(
                WarningCode.INVALID_GEOMETRY,
                f"Section '{label}': {err}; only fixed pressure drops are "
                f"counted",
                section.id
            ))
        velocity = velocity_fpm(section.cfm, geometry.area_ft2)
        roughness = section_roughness(section, materials_catalog)
        if roughness is None:
            warnings.append(DuctWarning(
                WarningCode.UNKNOWN_MATERIAL,
                f"Material '{section.material}' of section '{label}' is not "
                f"in the materials catalog; the duct is taken as smooth",
                section.id
            ))
            roughness = 0.0
        friction = friction_loss_in_wc(section, velocity, air, geometry, roughness, settings)
        straight_loss = friction.loss_in_wc
        reynolds_number = friction.reynolds_number
        friction_factor = friction.friction_factor
        if section.section_type == SectionType.FLEX and section.length_ft > settings.flex_max_length_ft:
            warnings.append(DuctWarning(
                WarningCode.FLEX_LENGTH_EXCEEDED,
                f"Flex duct length {section.length_ft} ft of section '{label}' "
                f"exceeds recommended {settings.flex_max_length_ft} ft",
                section.id
            ))
        material_key = FLEX_MATERIAL if section.section_type == SectionType.FLEX else section.material
        material = materials_catalog.get_material(material_key)
        if material is not None and material.max_velocity_fpm is not None and velocity > material.max_velocity_fpm:
            warnings.append(DuctWarning(
                WarningCode.MATERIAL_VELOCITY_EXCEEDED,
                f"Velocity {_fmt(velocity)} fpm in section '{label}' exceeds "
                f"maximum {_fmt(material.max_velocity_fpm)} fpm for "
                f"{material.display_name}",
                section.id
            ))

    vp = velocity_pressure_in_wc(velocity, air)
    fitting_losses = _fittings_loss(
        section.fittings, section, velocity, air,
        fittings_catalog, warnings
    )
    fittings_loss = sum(fl.loss_in_wc for fl in fitting_losses)
    return SectionResult(
        section_id=section.id,
        name=section.name,
        section_type=section.section_type,
        sort_order=section.sort_order,
        cfm=section.cfm,
        area_ft2=geometry.area_ft2,
        characteristic_diameter_in=geometry.characteristic_diameter_in,
        hydraulic_diameter_in=geometry.hydraulic_diameter_in,
        velocity_fpm=velocity,
        velocity_pressure_in_wc=vp,
        reynolds_number=reynolds_number,
        friction_factor=friction_factor,
        straight_loss_in_wc=straight_loss,
        fittings_loss_in_wc=fittings_loss,
        total_loss_in_wc=straight_loss + fittings_loss,
        fitting_losses=tuple(fitting_losses),
        warnings=tuple(warnings)
    )


def _sort_sections(sections: Sequence[DuctSection], warnings: List[DuctWarning]) -> List[DuctSection]:
    counts = Counter(s.sort_order for s in sections)
    for sort_order, n in sorted(counts.items()):
        if n > 1:
            warnings.append(DuctWarning(
                WarningCode.DUPLICATE_SORT_ORDER,
                f"{n} sections share sort order {sort_order}; they are "
                f"kept in input order"
            ))
    # `sorted` is stable
    return sorted(sections, key=lambda s: s.sort_order)


def _velocity_warnings(
    system: DuctSystem,
    section_results: Sequence[SectionResult],
    max_velocity: float,
    settings: CalculationSettings
) -> List[DuctWarning]:
    warnings = []
    limit = settings.get_velocity_limit(system.system_type)
    maximum = system.max_velocity_fpm if system.max_velocity_fpm else limit.maximum
    if max_velocity > maximum:
        section = max(section_results, key=lambda s: s.velocity_fpm)
        warnings.append(DuctWarning(
            WarningCode.VELOCITY_ABOVE_MAXIMUM,
            f"Max velocity {_fmt(max_velocity)} fpm exceeds maximum "
            f"{_fmt(maximum)} fpm",
            section.section_id
        ))
    has_velocity = any(s.velocity_fpm > 0.0 for s in section_results)
    if has_velocity and max_velocity < limit.recommended:
        warnings.append(DuctWarning(
            WarningCode.VELOCITY_BELOW_RECOMMENDED,
            f"Max velocity {_fmt(max_velocity)} fpm is below recommended "
            f"{_fmt(limit.recommended)} fpm for a {system.system_type.value} "
            f"system; the ducts may be oversized"
        ))
    return warnings


def calculate_duct_system(
    system: DuctSystem,
    sections: Sequence[DuctSection],
    fittings_catalog: Optional[FittingsCatalog] = None,
    materials_catalog: Optional[MaterialsCatalog] = None,
    settings: Optional[CalculationSettings] = None
) -> DuctCalculationResult:
    """Calculates the pressure loss of a duct system.

    Parameters
    ----------
    system:
        The duct system: altitude, air temperature, safety factor and
        velocity limits.
    sections:
        The sections of the duct system with their fittings. Sections are
        ordered by their `sort_order`; sections with the same sort order
        keep their order in `sections`.
    fittings_catalog: optional
        Catalog where the fitting types and equipment types of the sections
        are looked up. If None, the default catalog of the package is used.
    materials_catalog: optional
        Catalog where the materials and liners of the sections are looked
        up. If None, the default catalog of the package is used.
    settings: optional
        Calculation settings. If None, `DEFAULT_SETTINGS` is used.

    Returns
    -------
    DuctCalculationResult

    Raises
    ------
    ComputationError
        If the air properties cannot be determined at the altitude and
        temperature of the system.

    Notes
    -----
    Non-fatal conditions (unknown catalog keys, missing dimensions, sections
    without airflow, velocities out of range) are reported as warnings in
    the result.
    """
    settings = settings or DEFAULT_SETTINGS
    logger.debug(
        f"calculating duct system '{system.id}' "
        f"with {len(sections)} section(s)"
    )
    try:
        air = air_properties(system.altitude_ft, system.temperature_f)
    except ComputationError:
        logger.error(f"calculation of duct system '{system.id}' aborted")
        raise

    warnings: List[DuctWarning] = []
    ordered = _sort_sections(sections, warnings)
    section_results = [
        calculate_section(s, air, fittings_catalog, materials_catalog, settings)
        for s in ordered
    ]
    for s in section_results:
        warnings.extend(s.warnings)

    total_straight = sum(s.straight_loss_in_wc for s in section_results)
    total_fittings = sum(s.fittings_loss_in_wc for s in section_results)
    subtotal = total_straight + total_fittings
    safety_factor_in_wc = subtotal * system.safety_factor
    max_velocity = max((s.velocity_fpm for s in section_results), default=0.0)
    warnings.extend(_velocity_warnings(system, section_results, max_velocity, settings))

    for w in warnings:
        logger.debug(f"system '{system.id}': {w.code.value}: {w.message}")

    result = DuctCalculationResult(
        system_id=system.id,
        sections=tuple(section_results),
        total_straight_duct_loss=total_straight,
        total_fittings_loss=total_fittings,
        subtotal_loss=subtotal,
        safety_factor_in_wc=safety_factor_in_wc,
        safety_factor_percent=system.safety_factor * 100.0,
        total_system_loss=subtotal + safety_factor_in_wc,
        max_velocity_fpm=max_velocity,
        air_properties=air,
        altitude_ft=system.altitude_ft,
        temperature_f=system.temperature_f,
        total_cfm=system.total_cfm,
        warnings=tuple(warnings)
    )
    logger.debug(
        f"duct system '{system.id}': total system loss "
        f"{result.total_system_loss:.3f} in. w.c."
    )
    return result
