from typing import Optional, Tuple, TYPE_CHECKING
import numpy as np
from ductwork import Quantity

if TYPE_CHECKING:
    from ductwork.network import DuctCalculationResult

Q_ = Quantity

FLOW_UNIT = 'ft ** 3 / min'
PRESSURE_UNIT = 'in_wc'
R_UNIT = f'{PRESSURE_UNIT} / ({FLOW_UNIT}) ** 2'

# cfm * in. w.c. / 6356 = air horsepower
AIR_POWER_CONSTANT = 6356.0


class SystemCurve:
    """Class that represents the system curve of a duct system: the pressure
    loss the fan must overcome as a function of the airflow.

    The pressure loss is taken quadratic in the airflow:
    Δp = Δp_fixed + R * V².
    """

    def __init__(self):
        self.name: str = ''
        self._R: float = float('nan')
        self._dP_fixed: float = 0.0

    @classmethod
    def create(
        cls,
        R: Quantity,
        dP_fixed: Optional[Quantity] = None,
        name: str = ''
    ) -> 'SystemCurve':
        """Creates a `SystemCurve` object.

        Parameters
        ----------
        R:
            Resistance of the duct system (pressure / volume flow rate ** 2).
        dP_fixed: optional
            Pressure loss that doesn't depend on the airflow.
        name:
            Identifier for the system curve.
        """
        obj = cls()
        obj._R = R.to(R_UNIT).magnitude
        obj._dP_fixed = dP_fixed.to(PRESSURE_UNIT).magnitude if dP_fixed is not None else 0.0
        obj.name = name
        return obj

    @classmethod
    def from_design_point(cls, V_design: Quantity, dP_design: Quantity, name: str = '') -> 'SystemCurve':
        """Creates the quadratic system curve through the design point
        (`V_design`, `dP_design`).
        """
        V = V_design.to(FLOW_UNIT).magnitude
        if V <= 0.0:
            raise ValueError("the design airflow must be positive")
        dP = dP_design.to(PRESSURE_UNIT).magnitude
        return cls.create(Q_(dP / V ** 2, R_UNIT), name=name)

    @classmethod
    def from_result(
        cls,
        result: 'DuctCalculationResult',
        V_design: Optional[Quantity] = None
    ) -> 'SystemCurve':
        """Creates the system curve through the total system loss of a duct
        calculation result.

        Parameters
        ----------
        result:
            Calculation result of a duct system.
        V_design: optional
            Design airflow. If None, the total airflow of the system is used,
            or the largest section airflow if the system has no total airflow.
        """
        if V_design is None:
            cfm = result.total_cfm
            if cfm <= 0.0:
                cfm = max((s.cfm for s in result.sections), default=0.0)
            V_design = Q_(cfm, FLOW_UNIT)
        return cls.from_design_point(
            V_design,
            Q_(result.total_system_loss, PRESSURE_UNIT),
            name=result.system_id
        )

    def axes(
        self,
        V_ini: Quantity,
        V_fin: Quantity,
        num: int = 50
    ) -> Tuple[Quantity, Quantity]:
        """Returns the coordinate-axes of the system curve.

        Parameters
        ----------
        V_ini: Quantity
            The start point of the system curve.
        V_fin : Quantity
            The end point of the system curve.
        num: int, optional
            The number of coordinates on the system curve to be calculated,
            start- and endpoint included. The default is 50.

        Returns
        -------
        Tuple[Quantity, Quantity]
            The volume flow rate axis and pressure loss axis of the system
            curve.
        """
        V_ini = V_ini.to(FLOW_UNIT).magnitude
        V_fin = V_fin.to(FLOW_UNIT).magnitude
        V_ax = np.linspace(V_ini, V_fin, num, endpoint=True)
        dP_ax = self._dP_fixed + self._R * V_ax ** 2
        return Q_(V_ax, FLOW_UNIT), Q_(dP_ax, PRESSURE_UNIT)

    def pressure_loss(self, V: Quantity) -> Quantity:
        V = V.to(FLOW_UNIT).magnitude
        dP = self._dP_fixed + self._R * V ** 2
        return Q_(dP, PRESSURE_UNIT)


def estimate_fan_power(
    cfm: float,
    pressure_in_wc: float,
    fan_efficiency: float = 0.65
) -> Quantity:
    """Returns the brake horsepower of a fan that moves `cfm` against
    `pressure_in_wc`.

    Parameters
    ----------
    cfm:
        Airflow.
    pressure_in_wc:
        Total pressure the fan must deliver.
    fan_efficiency:
        Total efficiency of the fan (fraction between 0 and 1).

    Returns
    -------
    Quantity
        Brake horsepower.
    """
    if not 0.0 < fan_efficiency <= 1.0:
        raise ValueError(f"fan efficiency must be in (0, 1], got {fan_efficiency}")
    bhp = cfm * pressure_in_wc / (AIR_POWER_CONSTANT * fan_efficiency)
    return Q_(bhp, 'hp')
