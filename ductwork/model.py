"""Input records of the duct pressure-drop calculation: a `DuctSystem`, its
ordered `DuctSection` objects and the `DuctFitting` objects inside each
section.

All records are frozen dataclasses. A calculation always works on an
immutable snapshot of the duct path; to change a record, a new record is
created with `dataclasses.replace` (the `DuctProject` class in
`ductwork.network.project` does this for you).
"""
from typing import Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


class SystemType(Enum):
    SUPPLY = 'supply'
    RETURN = 'return'
    EXHAUST = 'exhaust'
    OUTSIDE_AIR = 'outside_air'


class SectionType(Enum):
    STRAIGHT = 'straight'
    FLEX = 'flex'
    EQUIPMENT = 'equipment'


class DuctShape(Enum):
    RECTANGULAR = 'rectangular'
    ROUND = 'round'


class DuctLiner(Enum):
    """Acoustic/thermal liner applied to the inside of the duct walls. The
    thickness and surface roughness of each liner are looked up in the
    materials catalog.
    """
    NONE = 'none'
    LINER_0_75 = '0.75'
    LINER_1_0 = '1.0'

    @classmethod
    def _missing_(cls, value):
        # also accept e.g. 0.75, '0.75in', '1', 1.0 and 0
        text = str(value).strip().lower().removesuffix('in').strip()
        if text == 'none':
            return cls.NONE
        try:
            thickness = float(text)
        except ValueError:
            return None
        for member in cls:
            if member is not cls.NONE and float(member.value) == thickness:
                return member
        if thickness == 0.0:
            return cls.NONE
        return None


class FlexInstall(Enum):
    """Install condition of a flexible duct section. The friction loss of the
    fully extended duct is multiplied with `correction_factor`.
    """
    FULLY_EXTENDED = 'fully_extended'
    TYPICAL = 'typical'
    COMPRESSED = 'compressed'

    @property
    def correction_factor(self) -> float:
        return _FLEX_CORRECTION[self]


_FLEX_CORRECTION = {
    FlexInstall.FULLY_EXTENDED: 1.0,
    FlexInstall.TYPICAL: 1.5,
    FlexInstall.COMPRESSED: 2.5
}


def _coerce(obj, name: str, enum_type: type[Enum]) -> None:
    value = getattr(obj, name)
    if value is not None and not isinstance(value, enum_type):
        object.__setattr__(obj, name, enum_type(value))


@dataclass(frozen=True)
class DuctFitting:
    """A fitting (elbow, transition, damper, terminal, ...) inside a duct
    section.

    Attributes
    ----------
    id:
        Identifier of the fitting.
    section_id:
        ID of the section the fitting belongs to.
    fitting_type:
        Key of the fitting in the fittings catalog.
    quantity:
        Number of identical fittings (at least 1).
    coefficient_override: optional
        Loss coefficient that replaces the catalog coefficient.
    fixed_dp_override: optional
        Pressure drop (in. w.c.) that replaces the catalog pressure drop of
        a fixed pressure drop fitting.
    radius_ratio: optional
        Ratio of the centerline radius to the width (R/W) of an elbow.
    has_turning_vanes: optional
        Whether a mitered elbow has turning vanes.
    damper_position_pct: optional
        Opening of a damper in percent (100 is fully open).
    """
    id: str
    section_id: str
    fitting_type: str
    quantity: int = 1
    coefficient_override: Optional[float] = None
    fixed_dp_override: Optional[float] = None
    radius_ratio: Optional[float] = None
    has_turning_vanes: Optional[bool] = None
    damper_position_pct: Optional[float] = None
    notes: str = ''

    def __post_init__(self):
        if int(self.quantity) != self.quantity or self.quantity < 1:
            raise ValueError(
                f"quantity of fitting '{self.id}' must be an integer >= 1, "
                f"got {self.quantity}"
            )
        object.__setattr__(self, 'quantity', int(self.quantity))
        if self.damper_position_pct is not None and not (0.0 <= self.damper_position_pct <= 100.0):
            raise ValueError(
                f"damper position of fitting '{self.id}' must be between "
                f"0 and 100 %, got {self.damper_position_pct}"
            )


@dataclass(frozen=True)
class DuctSection:
    """A section of the duct path: a straight duct, a flexible duct or a
    piece of equipment.

    Dimensions are expressed in inches, the length in feet and the airflow in
    CFM. Rectangular sections use `width_in` and `height_in`, round sections
    use `diameter_in`. Equipment sections have no geometry; their pressure
    drop is either `fixed_pressure_drop` (in. w.c.) or the catalog pressure
    drop of `equipment_type`.

    The airflow of each section is set independently: no conservation of
    mass is enforced between successive sections.

    A flexible duct section without `flex_install` takes the install
    condition from the calculation settings (`default_flex_install`).
    """
    id: str
    system_id: str
    name: str = ''
    section_type: SectionType = SectionType.STRAIGHT
    cfm: float = 0.0
    shape: DuctShape = DuctShape.RECTANGULAR
    width_in: Optional[float] = None
    height_in: Optional[float] = None
    diameter_in: Optional[float] = None
    length_ft: float = 0.0
    material: str = 'galvanized'
    liner: DuctLiner = DuctLiner.NONE
    flex_install: Optional[FlexInstall] = None
    equipment_type: Optional[str] = None
    fixed_pressure_drop: Optional[float] = None
    sort_order: int = 0
    fittings: Tuple[DuctFitting, ...] = field(default_factory=tuple)

    def __post_init__(self):
        _coerce(self, 'section_type', SectionType)
        _coerce(self, 'shape', DuctShape)
        _coerce(self, 'liner', DuctLiner)
        _coerce(self, 'flex_install', FlexInstall)
        if self.length_ft < 0.0:
            raise ValueError(
                f"length of section '{self.id}' must be >= 0 ft, "
                f"got {self.length_ft}"
            )
        if self.fixed_pressure_drop is not None and self.fixed_pressure_drop < 0.0:
            raise ValueError(
                f"fixed pressure drop of section '{self.id}' must be >= 0 "
                f"in. w.c., got {self.fixed_pressure_drop}"
            )
        object.__setattr__(self, 'fittings', tuple(self.fittings))


@dataclass(frozen=True)
class DuctSystem:
    """Configuration of a duct system.

    Attributes
    ----------
    id:
        Identifier of the system.
    name:
        Descriptive name.
    system_type:
        Supply, return, exhaust or outside air. Determines the default
        velocity limits.
    total_cfm:
        Design airflow of the system (informational).
    altitude_ft:
        Altitude of the site above sea level.
    temperature_f:
        Air temperature in °F.
    safety_factor:
        Margin added to the calculated pressure loss, as a fraction
        (0.15 = 15 %).
    max_velocity_fpm: optional
        Maximum allowed air velocity. Overrides the default maximum of the
        system type. `None` or 0 means not set.
    """
    id: str
    name: str = ''
    system_type: SystemType = SystemType.SUPPLY
    total_cfm: float = 0.0
    altitude_ft: float = 0.0
    temperature_f: float = 70.0
    safety_factor: float = 0.15
    max_velocity_fpm: Optional[float] = None
    notes: str = ''

    def __post_init__(self):
        _coerce(self, 'system_type', SystemType)
