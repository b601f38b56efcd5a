from .duct_schedule import (
    DuctSchedule,
    DuctScheduleFactory,
    round_duct_schedule,
    rectangular_duct_schedule
)
