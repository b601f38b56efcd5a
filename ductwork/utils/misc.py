from ductwork import Quantity


def in_wc_to_pa(pressure_in_wc: float) -> float:
    """Converts a pressure in inches of water column to pascal."""
    return Quantity(pressure_in_wc, 'in_wc').to('Pa').magnitude


def pa_to_in_wc(pressure_pa: float) -> float:
    """Converts a pressure in pascal to inches of water column."""
    return Quantity(pressure_pa, 'Pa').to('in_wc').magnitude


def pretty_unit(unit: str) -> str:
    """Returns the prettified form of the given unit."""
    q = Quantity(0, unit)
    q = f"{q:~P}".split(' ')
    return q[1]
