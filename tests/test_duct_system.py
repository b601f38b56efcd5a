"""
Tests for the duct system calculation: aggregation, safety factor and warnings
"""
import dataclasses
import math
import pytest

from ductwork import (
    ComputationError,
    CalculationSettings,
    SystemType,
    VelocityLimit,
    WarningCode,
    calculate_duct_system
)
from ductwork.fittings import velocity_pressure_in_wc


def _codes(result, section_id=None):
    return [
        w.code for w in result.warnings
        if section_id is None or w.section_id == section_id
    ]


def _straight_loss(width_in, height_in, cfm, length_ft, roughness_ft, air):
    """Darcy-Weisbach friction loss with the Swamee-Jain friction factor"""
    D = 1.30 * (width_in * height_in) ** 0.625 / (width_in + height_in) ** 0.25 / 12.0
    v = cfm / (width_in * height_in / 144.0) / 60.0
    Re = air.density_lb_ft3 * v * D / air.viscosity_lb_ft_s
    f = 0.25 / math.log10(roughness_ft / D / 3.7 + 5.74 / Re ** 0.9) ** 2
    return f * (length_ft / D) * air.density_lb_ft3 * v ** 2 / (2.0 * 32.174) / 5.202


class TestEndToEnd:
    """Single rectangular section with one radius elbow"""

    @pytest.fixture
    def result(self, supply_system, make_section, make_fitting):
        section = make_section(fittings=[make_fitting("elbow_rect_radius_1.0")])
        return calculate_duct_system(supply_system, [section])

    def test_subtotal_and_total(self, result, standard_air):
        straight = _straight_loss(12.0, 12.0, 1000.0, 50.0, 0.0003, standard_air)
        fittings = 0.22 * velocity_pressure_in_wc(1000.0, standard_air)

        assert result.total_straight_duct_loss == pytest.approx(straight, rel=1e-6)
        assert result.total_fittings_loss == pytest.approx(fittings, rel=1e-9)
        assert result.subtotal_loss == pytest.approx(straight + fittings, rel=1e-6)
        assert result.total_system_loss == pytest.approx(result.subtotal_loss * 1.15)

    def test_safety_factor(self, result):
        assert result.safety_factor_percent == pytest.approx(15.0)
        assert result.safety_factor_in_wc == pytest.approx(result.subtotal_loss * 0.15)

    def test_section_breakdown(self, result):
        section = result.get_section("sec-1")

        assert len(result.sections) == 1
        assert section.velocity_fpm == pytest.approx(1000.0)
        assert section.area_ft2 == pytest.approx(1.0)
        assert section.total_loss_in_wc == pytest.approx(result.subtotal_loss)
        assert len(section.fitting_losses) == 1
        assert section.fitting_losses[0].coefficient == pytest.approx(0.22)

    def test_system_snapshot(self, result):
        assert result.system_id == "sys-1"
        assert result.max_velocity_fpm == pytest.approx(1000.0)
        assert result.air_properties.density_lb_ft3 == pytest.approx(0.075)
        assert result.altitude_ft == 0.0
        assert result.temperature_f == 70.0
        assert result.total_cfm == 1000.0
        assert result.total_pressure_loss.to("in_wc").magnitude == pytest.approx(result.total_system_loss)

    def test_velocity_below_recommended(self, result):
        """Test that 1000 fpm is flagged as low for a supply system"""
        assert _codes(result) == [WarningCode.VELOCITY_BELOW_RECOMMENDED]


class TestAggregation:

    def test_losses_are_additive(self, supply_system, make_section):
        one = calculate_duct_system(supply_system, [make_section("a", length_ft=30.0)])
        two = calculate_duct_system(supply_system, [
            make_section("a", length_ft=30.0, sort_order=0),
            make_section("b", length_ft=30.0, sort_order=1),
        ])
        assert two.subtotal_loss == pytest.approx(2.0 * one.subtotal_loss)

    def test_sections_follow_sort_order(self, supply_system, make_section):
        sections = [
            make_section("c", sort_order=2),
            make_section("a", sort_order=0),
            make_section("b", sort_order=1),
        ]
        result = calculate_duct_system(supply_system, sections)
        assert [s.section_id for s in result.sections] == ["a", "b", "c"]

    def test_duplicate_sort_order_keeps_input_order(self, supply_system, make_section):
        sections = [make_section("b", sort_order=1), make_section("a", sort_order=1)]
        result = calculate_duct_system(supply_system, sections)

        assert [s.section_id for s in result.sections] == ["b", "a"]
        assert WarningCode.DUPLICATE_SORT_ORDER in _codes(result)

    def test_no_sections(self, supply_system):
        result = calculate_duct_system(supply_system, [])

        assert result.total_system_loss == 0.0
        assert result.max_velocity_fpm == 0.0
        assert result.warnings == ()

    def test_zero_safety_factor(self, supply_system, make_section):
        system = dataclasses.replace(supply_system, safety_factor=0.0)
        result = calculate_duct_system(system, [make_section()])
        assert result.total_system_loss == result.subtotal_loss

    def test_altitude_lowers_losses(self, supply_system, make_section):
        high = dataclasses.replace(supply_system, altitude_ft=5000.0)
        at_sea_level = calculate_duct_system(supply_system, [make_section()])
        at_altitude = calculate_duct_system(high, [make_section()])
        assert at_altitude.subtotal_loss < at_sea_level.subtotal_loss

    def test_freezing_point_of_air_is_fatal(self, supply_system, make_section):
        system = dataclasses.replace(supply_system, temperature_f=-460.0)
        with pytest.raises(ComputationError):
            calculate_duct_system(system, [make_section()])


class TestNonFatalConditions:
    """Conditions that produce warnings instead of exceptions"""

    def test_zero_airflow(self, supply_system, make_section, make_fitting):
        section = make_section(cfm=0.0, fittings=[make_fitting("terminal_diffuser_ceiling")])
        result = calculate_duct_system(supply_system, [section])
        section_result = result.get_section("sec-1")

        assert _codes(result) == [WarningCode.INVALID_AIRFLOW]
        assert section_result.velocity_fpm == 0.0
        assert section_result.total_loss_in_wc == 0.0
        assert result.total_system_loss == 0.0

    def test_zero_airflow_is_excluded_from_velocity_checks(self, supply_system, make_section):
        sections = [
            make_section("a", cfm=0.0, sort_order=0),
            make_section("b", cfm=3000.0, sort_order=1),
        ]
        result = calculate_duct_system(supply_system, sections)

        assert result.max_velocity_fpm == pytest.approx(3000.0)
        assert WarningCode.VELOCITY_ABOVE_MAXIMUM in _codes(result)

    def test_unknown_fitting(self, supply_system, make_section, make_fitting):
        section = make_section(fittings=[
            make_fitting("elbow_made_up", fitting_id="f1"),
            make_fitting("terminal_register", fitting_id="f2"),
        ])
        result = calculate_duct_system(supply_system, [section])
        section_result = result.get_section("sec-1")

        assert WarningCode.UNKNOWN_FITTING in _codes(result, "sec-1")
        assert section_result.fittings_loss_in_wc == pytest.approx(0.08)
        assert section_result.fitting_losses[0].loss_in_wc == 0.0
        assert section_result.fitting_losses[0].method is None

    def test_invalid_geometry_keeps_fixed_pressure_drops(self, supply_system, make_section, make_fitting):
        section = make_section(height_in=None, fittings=[
            make_fitting("elbow_rect_radius_1.0", fitting_id="f1"),
            make_fitting("terminal_diffuser_ceiling", fitting_id="f2"),
        ])
        result = calculate_duct_system(supply_system, [section])
        section_result = result.get_section("sec-1")

        assert WarningCode.INVALID_GEOMETRY in _codes(result, "sec-1")
        assert section_result.area_ft2 == 0.0
        assert section_result.velocity_fpm == 0.0
        assert section_result.straight_loss_in_wc == 0.0
        assert section_result.fittings_loss_in_wc == pytest.approx(0.10)

    def test_unknown_material_is_smooth(self, supply_system, make_section):
        galvanized = calculate_duct_system(supply_system, [make_section()])
        unknown = calculate_duct_system(supply_system, [make_section(material="unobtainium")])

        assert WarningCode.UNKNOWN_MATERIAL in _codes(unknown, "sec-1")
        assert 0.0 < unknown.subtotal_loss < galvanized.subtotal_loss

    def test_flex_length_exceeded(self, supply_system, make_section):
        section = make_section(section_type="flex", shape="round", diameter_in=10.0, length_ft=8.0)
        result = calculate_duct_system(supply_system, [section])
        assert WarningCode.FLEX_LENGTH_EXCEEDED in _codes(result, "sec-1")

    def test_material_velocity_exceeded(self, supply_system, make_section):
        section = make_section(section_type="flex", shape="round", diameter_in=10.0, length_ft=5.0)
        result = calculate_duct_system(supply_system, [section])
        # 1000 CFM through 10 in. is about 1833 fpm, above 1500 fpm for flex duct
        assert WarningCode.MATERIAL_VELOCITY_EXCEEDED in _codes(result, "sec-1")
        assert WarningCode.FLEX_LENGTH_EXCEEDED not in _codes(result)


class TestSectionValidation:

    def test_negative_length_is_rejected(self, make_section):
        with pytest.raises(ValueError):
            make_section(length_ft=-50.0)

    def test_negative_fixed_pressure_drop_is_rejected(self, make_section):
        with pytest.raises(ValueError):
            make_section(section_type="equipment", fixed_pressure_drop=-0.2)

    def test_zero_length_is_allowed(self, supply_system, make_section):
        result = calculate_duct_system(supply_system, [make_section(length_ft=0.0)])
        assert result.total_straight_duct_loss == 0.0


class TestEquipmentSections:

    def _equipment(self, make_section, **fields):
        return make_section(
            "ahu", section_type="equipment", width_in=None, height_in=None,
            length_ft=0.0, **fields
        )

    def test_fixed_pressure_drop(self, supply_system, make_section):
        section = self._equipment(make_section, fixed_pressure_drop=0.5, equipment_type="equip_coil_4row")
        result = calculate_duct_system(supply_system, [section])

        assert result.get_section("ahu").straight_loss_in_wc == 0.5
        assert result.get_section("ahu").velocity_fpm == 0.0
        assert result.warnings == ()

    def test_catalog_pressure_drop(self, supply_system, make_section):
        section = self._equipment(make_section, equipment_type="equip_coil_4row")
        result = calculate_duct_system(supply_system, [section])
        assert result.total_straight_duct_loss == pytest.approx(0.45)

    def test_unknown_equipment(self, supply_system, make_section):
        section = self._equipment(make_section, equipment_type="equip_flux_capacitor")
        result = calculate_duct_system(supply_system, [section])

        assert _codes(result) == [WarningCode.UNKNOWN_EQUIPMENT]
        assert result.total_system_loss == 0.0

    def test_fixed_fittings_in_equipment_section(self, supply_system, make_section, make_fitting):
        section = self._equipment(
            make_section,
            fixed_pressure_drop=0.5,
            fittings=[make_fitting("equip_filter_merv8_clean", section_id="ahu")]
        )
        result = calculate_duct_system(supply_system, [section])
        assert result.get_section("ahu").total_loss_in_wc == pytest.approx(0.65)


class TestVelocityLimits:

    def test_system_velocity_cap(self, supply_system, make_section):
        system = dataclasses.replace(supply_system, max_velocity_fpm=900.0)
        result = calculate_duct_system(system, [make_section()])

        warning = result.get_warnings(WarningCode.VELOCITY_ABOVE_MAXIMUM)[0]
        assert warning.section_id == "sec-1"

    def test_zero_velocity_cap_means_not_set(self, supply_system, make_section):
        system = dataclasses.replace(supply_system, max_velocity_fpm=0.0)
        result = calculate_duct_system(system, [make_section(cfm=2200.0)])
        assert WarningCode.VELOCITY_ABOVE_MAXIMUM not in _codes(result)

    def test_system_type_ceiling(self, supply_system, make_section):
        exhaust = dataclasses.replace(supply_system, system_type="exhaust")
        section = make_section(cfm=2800.0)

        assert WarningCode.VELOCITY_ABOVE_MAXIMUM in _codes(calculate_duct_system(supply_system, [section]))
        assert WarningCode.VELOCITY_ABOVE_MAXIMUM not in _codes(calculate_duct_system(exhaust, [section]))

    def test_velocity_in_recommended_range(self, supply_system, make_section):
        result = calculate_duct_system(supply_system, [make_section(cfm=2200.0)])
        assert _codes(result) == []

    def test_custom_velocity_limits(self, supply_system, make_section):
        settings = CalculationSettings.create(
            velocity_limits={"supply": VelocityLimit(maximum=1200.0, recommended=800.0)}
        )
        result = calculate_duct_system(supply_system, [make_section()], settings=settings)
        assert _codes(result) == []


class TestSettings:

    def test_friction_correlation_setting(self, supply_system, make_section):
        default = calculate_duct_system(supply_system, [make_section()])
        settings = CalculationSettings.create(friction_correlation="haaland")
        haaland = calculate_duct_system(supply_system, [make_section()], settings=settings)

        assert haaland.subtotal_loss == pytest.approx(default.subtotal_loss, rel=0.03)
        assert haaland.subtotal_loss != default.subtotal_loss

    def test_default_flex_install_setting(self, supply_system, make_section):
        """Test that flex sections without an install condition follow the
        settings
        """
        section = make_section(
            section_type="flex", shape="round", diameter_in=10.0,
            cfm=400.0, length_ft=5.0
        )
        typical = calculate_duct_system(supply_system, [section])
        settings = CalculationSettings.create(default_flex_install="compressed")
        compressed = calculate_duct_system(supply_system, [section], settings=settings)

        assert section.flex_install is None
        assert compressed.subtotal_loss == pytest.approx(typical.subtotal_loss * 2.5 / 1.5)

    def test_section_install_condition_wins(self, supply_system, make_section):
        section = make_section(
            section_type="flex", shape="round", diameter_in=10.0,
            cfm=400.0, length_ft=5.0, flex_install="typical"
        )
        settings = CalculationSettings.create(default_flex_install="compressed")
        default = calculate_duct_system(supply_system, [section])
        result = calculate_duct_system(supply_system, [section], settings=settings)

        assert result.subtotal_loss == pytest.approx(default.subtotal_loss)

    def test_unknown_setting(self):
        with pytest.raises(ValueError):
            CalculationSettings.create(friction_model="colebrook")

    def test_unknown_correlation(self):
        with pytest.raises(ValueError):
            CalculationSettings.create(friction_correlation="colebrook")

    def test_velocity_limits_merge_per_system_type(self):
        settings = CalculationSettings.create(
            velocity_limits={"return": VelocityLimit(maximum=1800.0, recommended=1200.0)}
        )
        assert settings.get_velocity_limit(SystemType.RETURN).maximum == 1800.0
        assert settings.get_velocity_limit(SystemType.SUPPLY).maximum == 2500.0
