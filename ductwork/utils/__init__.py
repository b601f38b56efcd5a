from .system_curve import SystemCurve, estimate_fan_power
from .misc import in_wc_to_pa, pa_to_in_wc, pretty_unit
