from .cross_section import (
    SectionGeometry,
    NO_GEOMETRY,
    section_geometry,
    equivalent_diameter,
    hydraulic_diameter,
    rectangular_height
)

from .friction import (
    FrictionLoss,
    velocity_fpm,
    reynolds_number,
    darcy_friction_factor,
    section_roughness,
    friction_loss_in_wc
)
