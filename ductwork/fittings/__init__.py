from .fitting_loss import (
    FittingLoss,
    velocity_pressure_in_wc,
    resolve_coefficient,
    fitting_loss_in_wc
)
