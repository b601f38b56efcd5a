"""
Tests for the fitting loss model and the fitting records
"""
import pytest

from ductwork import UnknownFittingError, DuctFitting, air_properties
from ductwork.catalog import FittingMethod
from ductwork.fittings import velocity_pressure_in_wc, resolve_coefficient, fitting_loss_in_wc
from ductwork.catalog import DEFAULT_FITTINGS_CATALOG


class TestVelocityPressure:

    def test_standard_air(self):
        """Test that 4005 fpm of standard air has a velocity pressure of 1 in. w.c."""
        assert velocity_pressure_in_wc(4005.0) == pytest.approx(1.0)

    def test_density_correction(self, standard_air):
        thin_air = air_properties(5000.0, 70.0)
        vp_std = velocity_pressure_in_wc(1000.0, standard_air)
        vp_thin = velocity_pressure_in_wc(1000.0, thin_air)
        assert vp_std == pytest.approx((1000.0 / 4005.0) ** 2)
        assert vp_thin == pytest.approx(vp_std * thin_air.density_lb_ft3 / 0.075)

    def test_no_velocity(self, standard_air):
        assert velocity_pressure_in_wc(0.0, standard_air) == 0.0


class TestCoefficientFittings:
    """Fittings with a loss coefficient"""

    def test_radius_elbow(self, make_fitting, standard_air):
        """Test a 90° radius elbow with R/W = 1.0"""
        fitting = make_fitting("elbow_rect_radius_1.0")
        loss = fitting_loss_in_wc(fitting, 1000.0, standard_air)

        assert loss.method == FittingMethod.C_COEFFICIENT
        assert loss.coefficient == pytest.approx(0.22)
        assert loss.loss_in_wc == pytest.approx(0.22 * (1000.0 / 4005.0) ** 2)

    def test_doubling_quantity_doubles_loss(self, make_fitting, standard_air):
        single = fitting_loss_in_wc(make_fitting("tee_supply_branch"), 1500.0, standard_air)
        double = fitting_loss_in_wc(make_fitting("tee_supply_branch", quantity=2), 1500.0, standard_air)

        assert double.loss_per_unit_in_wc == pytest.approx(single.loss_per_unit_in_wc)
        assert double.loss_in_wc == pytest.approx(2.0 * single.loss_in_wc)

    def test_coefficient_override(self, make_fitting, standard_air):
        fitting = make_fitting("elbow_rect_radius_1.0", coefficient_override=0.5, radius_ratio=2.0)
        loss = fitting_loss_in_wc(fitting, 1000.0, standard_air)
        assert loss.coefficient == 0.5

    def test_loss_scales_with_velocity_squared(self, make_fitting, standard_air):
        fitting = make_fitting("wye_45_symmetric")
        slow = fitting_loss_in_wc(fitting, 1000.0, standard_air)
        fast = fitting_loss_in_wc(fitting, 2000.0, standard_air)
        assert fast.loss_in_wc == pytest.approx(4.0 * slow.loss_in_wc)


class TestCoefficientResolution:
    """Selection of catalog sub-variants"""

    def _data(self, fitting_type):
        return DEFAULT_FITTINGS_CATALOG.get(fitting_type)

    @pytest.mark.parametrize("radius_ratio, expected", [
        (0.5, 0.57),
        (1.25, 0.175),
        (2.0, 0.09),
        (3.0, 0.09),
        (0.25, 0.57),
    ])
    def test_radius_ratio_interpolation(self, make_fitting, radius_ratio, expected):
        fitting = make_fitting("elbow_rect_radius_1.0", radius_ratio=radius_ratio)
        c = resolve_coefficient(fitting, self._data("elbow_rect_radius_1.0"))
        assert c == pytest.approx(expected)

    @pytest.mark.parametrize("position, expected", [
        (100.0, 0.04),
        (50.0, 2.5),
        (45.0, 4.25),
        (5.0, 120.0),
    ])
    def test_damper_position(self, make_fitting, position, expected):
        fitting = make_fitting("damper_volume_open", damper_position_pct=position)
        c = resolve_coefficient(fitting, self._data("damper_volume_open"))
        assert c == pytest.approx(expected)

    def test_turning_vanes(self, make_fitting):
        with_vanes = make_fitting("elbow_rect_mitered_no_vanes", has_turning_vanes=True)
        without_vanes = make_fitting("elbow_rect_mitered_double_vanes", has_turning_vanes=False)

        assert resolve_coefficient(with_vanes, self._data("elbow_rect_mitered_no_vanes")) == 0.33
        assert resolve_coefficient(without_vanes, self._data("elbow_rect_mitered_double_vanes")) == 1.3

    def test_sub_variant_without_table_uses_base_coefficient(self, make_fitting):
        fitting = make_fitting("tee_bullhead", radius_ratio=1.5, damper_position_pct=50.0)
        assert resolve_coefficient(fitting, self._data("tee_bullhead")) == 1.8

    def test_override_takes_precedence(self, make_fitting):
        fitting = make_fitting("damper_volume_open", damper_position_pct=50.0, coefficient_override=1.0)
        assert resolve_coefficient(fitting, self._data("damper_volume_open")) == 1.0


class TestFixedPressureDropFittings:
    """Terminals and equipment with a fixed pressure drop"""

    @pytest.mark.parametrize("velocity", [0.0, 500.0, 2500.0])
    def test_independent_of_velocity(self, make_fitting, standard_air, velocity):
        fitting = make_fitting("terminal_diffuser_ceiling")
        loss = fitting_loss_in_wc(fitting, velocity, standard_air)

        assert loss.method == FittingMethod.FIXED_DP
        assert loss.coefficient is None
        assert loss.loss_in_wc == pytest.approx(0.10)

    def test_fixed_dp_override(self, make_fitting, standard_air):
        fitting = make_fitting("equip_filter_merv13_clean", fixed_dp_override=0.42, quantity=2)
        loss = fitting_loss_in_wc(fitting, 1000.0, standard_air)
        assert loss.loss_per_unit_in_wc == 0.42
        assert loss.loss_in_wc == pytest.approx(0.84)


class TestUnknownFitting:

    def test_unknown_fitting_type_raises(self, make_fitting, standard_air):
        with pytest.raises(UnknownFittingError):
            fitting_loss_in_wc(make_fitting("elbow_made_up"), 1000.0, standard_air)


class TestDuctFittingRecord:

    @pytest.mark.parametrize("quantity", [0, -1, 1.5])
    def test_invalid_quantity(self, quantity):
        with pytest.raises(ValueError):
            DuctFitting(id="f", section_id="s", fitting_type="tee_bullhead", quantity=quantity)

    def test_invalid_damper_position(self):
        with pytest.raises(ValueError):
            DuctFitting(id="f", section_id="s", fitting_type="damper_volume_open", damper_position_pct=120.0)
