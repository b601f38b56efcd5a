"""Configuration of the duct pressure-drop calculation.

The default configuration is `DEFAULT_SETTINGS`. A modified configuration is
created with `CalculationSettings.create(**overrides)` and passed to the
calculation, e.g.::

    settings = CalculationSettings.create(
        friction_correlation='haaland',
        velocity_limits={'supply': VelocityLimit(maximum=2200, recommended=1800)}
    )
    result = calculate_duct_system(system, sections, settings=settings)
"""
from typing import Mapping, Dict, Any
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from .model import SystemType, FlexInstall


@dataclass(frozen=True)
class VelocityLimit:
    """Velocity limits of a system type in fpm.

    Attributes
    ----------
    maximum:
        Velocity ceiling; a higher peak velocity raises a warning.
    recommended:
        Recommended design velocity; a lower peak velocity hints at an
        oversized duct system.
    """
    maximum: float
    recommended: float


DEFAULT_VELOCITY_LIMITS: Mapping[SystemType, VelocityLimit] = MappingProxyType({
    SystemType.SUPPLY: VelocityLimit(maximum=2500.0, recommended=2000.0),
    SystemType.RETURN: VelocityLimit(maximum=2000.0, recommended=1500.0),
    SystemType.EXHAUST: VelocityLimit(maximum=3000.0, recommended=2000.0),
    SystemType.OUTSIDE_AIR: VelocityLimit(maximum=2000.0, recommended=1500.0)
})

FRICTION_CORRELATIONS = ('swamee_jain', 'haaland', 'churchill', 'serghide')


@dataclass(frozen=True)
class CalculationSettings:
    """Settings of the calculation engine.

    Attributes
    ----------
    friction_correlation:
        Explicit approximation of the Colebrook-White equation used to get
        the Darcy friction factor: 'swamee_jain', 'haaland', 'churchill' or
        'serghide'.
    laminar_reynolds_limit:
        Below this Reynolds number the flow is laminar and the friction
        factor is 64 / Re.
    flex_max_length_ft:
        Maximum recommended length of a flexible duct section.
    default_flex_install:
        Install condition assumed for flexible duct sections that don't
        specify one.
    velocity_limits:
        Maximum and recommended velocity per system type.
    """
    friction_correlation: str = 'swamee_jain'
    laminar_reynolds_limit: float = 2300.0
    flex_max_length_ft: float = 5.0
    default_flex_install: FlexInstall = FlexInstall.TYPICAL
    velocity_limits: Mapping[SystemType, VelocityLimit] = field(
        default_factory=lambda: DEFAULT_VELOCITY_LIMITS
    )

    def __post_init__(self):
        if self.friction_correlation not in FRICTION_CORRELATIONS:
            raise ValueError(
                f"unknown friction correlation '{self.friction_correlation}'; "
                f"choose one of {', '.join(FRICTION_CORRELATIONS)}"
            )
        if not isinstance(self.default_flex_install, FlexInstall):
            object.__setattr__(self, 'default_flex_install', FlexInstall(self.default_flex_install))

    @classmethod
    def create(cls, **overrides: Any) -> 'CalculationSettings':
        """Returns a `CalculationSettings` object with the default settings
        replaced by `overrides`. Velocity limits are merged per system type:
        system types that are not mentioned in `overrides['velocity_limits']`
        keep their default limits. The keys of the velocity limits can be
        `SystemType` members or their string values.
        """
        names = {f.name for f in fields(cls)}
        unknown = set(overrides) - names
        if unknown:
            raise ValueError(f"unknown setting(s): {', '.join(sorted(unknown))}")
        limits = overrides.pop('velocity_limits', None)
        obj = replace(DEFAULT_SETTINGS, **overrides)
        if limits is not None:
            merged: Dict[SystemType, VelocityLimit] = dict(DEFAULT_VELOCITY_LIMITS)
            for key, limit in limits.items():
                merged[SystemType(key) if not isinstance(key, SystemType) else key] = limit
            obj = replace(obj, velocity_limits=MappingProxyType(merged))
        return obj

    def get_velocity_limit(self, system_type: SystemType) -> VelocityLimit:
        return self.velocity_limits.get(
            system_type,
            DEFAULT_VELOCITY_LIMITS[SystemType.SUPPLY]
        )


DEFAULT_SETTINGS = CalculationSettings()
