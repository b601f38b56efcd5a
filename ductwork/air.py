"""Properties of the air flowing in a duct system, corrected for the altitude
of the site and the air temperature.
"""
from dataclasses import dataclass
from ductwork import Quantity
from ductwork.exceptions import ComputationError
from ductwork.logging import ModuleLogger

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)
logger.setLevel(ModuleLogger.WARNING)

# standard air: sea level, 70 °F
STANDARD_DENSITY = 0.075             # lb/ft³
STANDARD_TEMPERATURE_F = 70.0        # °F
ABSOLUTE_ZERO_F = -459.67            # °F

# barometric approximation of the standard atmosphere
LAPSE_COEFFICIENT = 6.8753e-6        # 1/ft
PRESSURE_EXPONENT = 5.2559

# Sutherland's law for air
SUTHERLAND_MU_0 = 1.716e-5           # Pa.s
SUTHERLAND_T_0 = 273.15              # K
SUTHERLAND_S = 110.4                 # K
PA_S_TO_LB_FT_S = 0.672              # Pa.s -> lb/(ft.s)

SPECIFIC_HEAT = 0.24                 # Btu/(lb.°F)


@dataclass(frozen=True)
class AirProperties:
    """Air properties at the conditions of a duct system.

    Attributes
    ----------
    density_lb_ft3:
        Mass density in lb/ft³.
    viscosity_lb_ft_s:
        Dynamic viscosity in lb/(ft.s).
    specific_heat_btu_lb_f:
        Specific heat in Btu/(lb.°F), taken constant.
    """
    density_lb_ft3: float
    viscosity_lb_ft_s: float
    specific_heat_btu_lb_f: float = SPECIFIC_HEAT

    @property
    def density_ratio(self) -> float:
        """Ratio of the air density to the density of standard air."""
        return self.density_lb_ft3 / STANDARD_DENSITY


def _check_temperature(temperature_f: float) -> None:
    if temperature_f <= ABSOLUTE_ZERO_F:
        logger.error(f"air temperature {temperature_f} °F is at or below absolute zero")
        raise ComputationError(
            f"air temperature {temperature_f} °F is at or below "
            f"absolute zero ({ABSOLUTE_ZERO_F} °F)"
        )


def air_density(altitude_ft: float, temperature_f: float) -> float:
    """Returns the air density in lb/ft³ at the given altitude (ft) and air
    temperature (°F).

    The density of standard air (0.075 lb/ft³ at sea level and 70 °F) is
    corrected with the pressure ratio of the standard atmosphere at the
    given altitude and with the ratio of the absolute temperatures (ideal gas
    law).

    Raises
    ------
    ComputationError
        If the temperature is at or below absolute zero, or if the altitude
        lies outside the range of the barometric approximation.
    """
    _check_temperature(temperature_f)
    base = 1.0 - LAPSE_COEFFICIENT * altitude_ft
    if base <= 0.0:
        logger.error(f"altitude {altitude_ft} ft is out of range")
        raise ComputationError(
            f"altitude {altitude_ft} ft is outside the range of the "
            f"barometric approximation"
        )
    pressure_ratio = base ** PRESSURE_EXPONENT
    T_std = Q_(STANDARD_TEMPERATURE_F, 'degF').to('degR').magnitude
    T = Q_(temperature_f, 'degF').to('degR').magnitude
    temperature_ratio = T_std / T
    return STANDARD_DENSITY * pressure_ratio * temperature_ratio


def air_viscosity(temperature_f: float) -> float:
    """Returns the dynamic viscosity of air in lb/(ft.s) at the given air
    temperature (°F) according to Sutherland's law.

    Raises
    ------
    ComputationError
        If the temperature is at or below absolute zero.
    """
    _check_temperature(temperature_f)
    T = Q_(temperature_f, 'degF').to('K').magnitude
    T_0 = SUTHERLAND_T_0
    S = SUTHERLAND_S
    mu = SUTHERLAND_MU_0 * (T / T_0) ** 1.5 * (T_0 + S) / (T + S)
    return mu * PA_S_TO_LB_FT_S


def air_properties(altitude_ft: float, temperature_f: float) -> AirProperties:
    """Returns the `AirProperties` at the given altitude (ft) and air
    temperature (°F).

    Raises
    ------
    ComputationError
        If the temperature is at or below absolute zero, or if the altitude
        lies outside the range of the barometric approximation.
    """
    air = AirProperties(
        density_lb_ft3=air_density(altitude_ft, temperature_f),
        viscosity_lb_ft_s=air_viscosity(temperature_f)
    )
    logger.debug(
        f"air at {altitude_ft} ft, {temperature_f} °F: "
        f"rho = {air.density_lb_ft3:.5f} lb/ft³, "
        f"mu = {air.viscosity_lb_ft_s:.4e} lb/(ft.s)"
    )
    return air
