"""
Tests for the materials and fittings catalogs
"""
import pandas as pd
import pytest

from ductwork import DuctLiner
from ductwork.catalog import (
    FittingCategory,
    FittingMethod,
    FittingData,
    FittingsCatalog,
    MaterialsCatalog,
    NO_LINER,
    DEFAULT_FITTINGS_CATALOG,
    DEFAULT_MATERIALS_CATALOG
)


class TestMaterialsCatalog:

    @pytest.mark.parametrize("material, roughness", [
        ("galvanized", 0.0003),
        ("aluminum", 0.0001),
        ("stainless", 0.00015),
        ("fiberglass", 0.003),
        ("flex", 0.003),
    ])
    def test_material_roughness(self, material, roughness):
        assert DEFAULT_MATERIALS_CATALOG.get_material(material).roughness_ft == roughness

    def test_unknown_material(self):
        assert DEFAULT_MATERIALS_CATALOG.get_material("wood") is None
        assert "wood" not in DEFAULT_MATERIALS_CATALOG
        assert "galvanized" in DEFAULT_MATERIALS_CATALOG

    def test_liners(self):
        assert DEFAULT_MATERIALS_CATALOG.get_liner(DuctLiner.NONE) is NO_LINER
        assert DEFAULT_MATERIALS_CATALOG.get_liner("0.75").thickness_in == 0.75
        assert DEFAULT_MATERIALS_CATALOG.get_liner(1.0).thickness_in == 1.0

    def test_from_csv_file(self, tmp_path):
        file_path = tmp_path / "materials.csv"
        file_path.write_text(
            "id,display_name,roughness_ft,max_velocity_fpm\n"
            "pvc,PVC Duct,0.00005,\n"
            "spiral,Spiral Seam Steel,0.0003,3000\n"
        )
        catalog = MaterialsCatalog.from_file(file_path)

        assert catalog.get_material("pvc").roughness_ft == 0.00005
        assert catalog.get_material("pvc").max_velocity_fpm is None
        assert catalog.get_material("spiral").max_velocity_fpm == 3000.0
        assert catalog.get_liner("1.0").thickness_in == 1.0

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_MATERIALS_CATALOG.materials["wood"] = None


class TestDuctLinerKeys:

    @pytest.mark.parametrize("value, expected", [
        ("none", DuctLiner.NONE),
        (0, DuctLiner.NONE),
        (0.75, DuctLiner.LINER_0_75),
        ("0.75in", DuctLiner.LINER_0_75),
        ("1", DuctLiner.LINER_1_0),
    ])
    def test_liner_aliases(self, value, expected):
        assert DuctLiner(value) is expected

    def test_unknown_liner(self):
        with pytest.raises(ValueError):
            DuctLiner("2.0")


class TestFittingsCatalog:

    def test_all_categories_present(self):
        for category in FittingCategory:
            assert DEFAULT_FITTINGS_CATALOG.get_by_category(category)

    def test_terminals_have_fixed_pressure_drop(self):
        for data in DEFAULT_FITTINGS_CATALOG.get_by_category("terminal"):
            assert data.method == FittingMethod.FIXED_DP
            assert data.default_dp is not None

    def test_coefficient_fittings_have_coefficient(self):
        for data in DEFAULT_FITTINGS_CATALOG.fittings.values():
            if data.method == FittingMethod.C_COEFFICIENT:
                assert data.coefficient is not None

    def test_lookup(self):
        assert DEFAULT_FITTINGS_CATALOG.get("elbow_rect_radius_1.0").coefficient == 0.22
        assert DEFAULT_FITTINGS_CATALOG.get("equip_coil_4row").default_dp == 0.45
        assert DEFAULT_FITTINGS_CATALOG.get("elbow_made_up") is None
        assert "tee_bullhead" in DEFAULT_FITTINGS_CATALOG

    def test_from_dataframe(self):
        df = pd.DataFrame({
            "id": ["custom_elbow", "custom_grille"],
            "display_name": ["Custom Elbow", "Custom Grille"],
            "category": ["elbow", "terminal"],
            "method": ["c_coefficient", "fixed_dp"],
            "coefficient": [0.3, float("nan")],
            "default_dp": [float("nan"), 0.07],
        })
        catalog = FittingsCatalog.from_dataframe(df)

        assert len(catalog) == 2
        elbow = catalog.get("custom_elbow")
        assert elbow.category == FittingCategory.ELBOW
        assert elbow.coefficient == 0.3
        assert elbow.default_dp is None
        assert catalog.get("custom_grille").default_dp == 0.07

    def test_from_csv_file(self, tmp_path):
        file_path = tmp_path / "fittings.csv"
        file_path.write_text(
            "id,display_name,category,method,coefficient,default_dp\n"
            "silencer_3ft,Silencer 3 ft,equipment,fixed_dp,,0.25\n"
        )
        catalog = FittingsCatalog.from_file(file_path)
        assert catalog.get("silencer_3ft").method == FittingMethod.FIXED_DP
        assert catalog.get("silencer_3ft").default_dp == 0.25

    def test_merge(self):
        extra = FittingsCatalog([
            FittingData("tee_bullhead", "Bullhead Tee (tested)", "tee", "c_coefficient", coefficient=1.5)
        ])
        merged = DEFAULT_FITTINGS_CATALOG.merge(extra)

        assert merged.get("tee_bullhead").coefficient == 1.5
        assert len(merged) == len(DEFAULT_FITTINGS_CATALOG)
        assert DEFAULT_FITTINGS_CATALOG.get("tee_bullhead").coefficient == 1.8

    def test_invalid_category(self):
        with pytest.raises(ValueError):
            FittingData("x", "X", "gadget", "c_coefficient", coefficient=1.0)
