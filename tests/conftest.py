"""
Shared fixtures of the duct calculation tests
"""
import pytest

from ductwork import DuctSystem, DuctSection, DuctFitting, air_properties


@pytest.fixture
def standard_air():
    """Air at sea level and 70 °F"""
    return air_properties(0.0, 70.0)


@pytest.fixture
def supply_system():
    """Supply system at sea level, 70 °F, 15 % safety factor"""
    return DuctSystem(
        id="sys-1",
        name="AHU-1 Supply",
        system_type="supply",
        total_cfm=1000.0,
        altitude_ft=0.0,
        temperature_f=70.0,
        safety_factor=0.15
    )


@pytest.fixture
def make_section():
    """Factory for straight 12 x 12 in. galvanized sections"""
    def _make(section_id="sec-1", **fields):
        kwargs = dict(
            system_id="sys-1",
            name=section_id,
            section_type="straight",
            cfm=1000.0,
            shape="rectangular",
            width_in=12.0,
            height_in=12.0,
            length_ft=50.0,
            material="galvanized",
            liner="none"
        )
        kwargs.update(fields)
        return DuctSection(id=section_id, **kwargs)
    return _make


@pytest.fixture
def make_fitting():
    """Factory for fittings of section 'sec-1'"""
    def _make(fitting_type, fitting_id="fit-1", **fields):
        fields.setdefault("section_id", "sec-1")
        return DuctFitting(id=fitting_id, fitting_type=fitting_type, **fields)
    return _make
