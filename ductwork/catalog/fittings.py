"""Catalog of duct fittings with their loss data.

Loss coefficients based on the SMACNA HVAC Duct Fitting Database and ASHRAE
Fundamentals. Pressure drops of terminals and equipment are typical values;
check the manufacturer data of the selected products.
"""
from typing import Iterable, Optional, Mapping, Tuple, List, Union
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
import math
import pandas as pd


class FittingCategory(Enum):
    ELBOW = 'elbow'
    TRANSITION = 'transition'
    TEE = 'tee'
    WYE = 'wye'
    DAMPER = 'damper'
    TERMINAL = 'terminal'
    EQUIPMENT = 'equipment'


class FittingMethod(Enum):
    """How the pressure loss of a fitting is determined.

    C_COEFFICIENT:
        The loss is a loss coefficient times the velocity pressure in the
        duct section.
    FIXED_DP:
        The loss is a fixed pressure drop, independent of the air velocity.
    """
    C_COEFFICIENT = 'c_coefficient'
    FIXED_DP = 'fixed_dp'


@dataclass(frozen=True)
class FittingData:
    """Catalog entry of a fitting type.

    Attributes
    ----------
    id:
        Key of the fitting type in the catalog.
    display_name:
        Descriptive name.
    category:
        See enum `FittingCategory`.
    method:
        See enum `FittingMethod`.
    coefficient: optional
        Loss coefficient (C_COEFFICIENT method).
    default_dp: optional
        Pressure drop in in. w.c. (FIXED_DP method).
    radius_ratio_table:
        Pairs (R/W, C) to select the loss coefficient of an elbow by its
        radius ratio. Intermediate ratios are interpolated linearly.
    vanes_table:
        Pairs (has turning vanes, C) to select the loss coefficient of a
        mitered elbow with or without turning vanes.
    damper_position_table:
        Pairs (% open, C) to select the loss coefficient of a damper by its
        position. Intermediate positions are interpolated linearly.
    """
    id: str
    display_name: str
    category: FittingCategory
    method: FittingMethod
    coefficient: Optional[float] = None
    default_dp: Optional[float] = None
    radius_ratio_table: Tuple[Tuple[float, float], ...] = ()
    vanes_table: Tuple[Tuple[bool, float], ...] = ()
    damper_position_table: Tuple[Tuple[float, float], ...] = ()
    description: str = ''

    def __post_init__(self):
        if not isinstance(self.category, FittingCategory):
            object.__setattr__(self, 'category', FittingCategory(self.category))
        if not isinstance(self.method, FittingMethod):
            object.__setattr__(self, 'method', FittingMethod(self.method))


class FittingsCatalog:
    """Read-only catalog of fitting types, keyed by fitting type ID."""

    def __init__(self, fittings: Iterable[FittingData]) -> None:
        self._fittings = MappingProxyType({f.id: f for f in fittings})

    @property
    def fittings(self) -> Mapping[str, FittingData]:
        return self._fittings

    def __contains__(self, fitting_type: str) -> bool:
        return fitting_type in self._fittings

    def __len__(self) -> int:
        return len(self._fittings)

    def get(self, fitting_type: str) -> Optional[FittingData]:
        """Returns the catalog entry of `fitting_type`, or `None` if the
        fitting type is not in the catalog.
        """
        return self._fittings.get(fitting_type)

    def get_by_category(self, category: Union[FittingCategory, str]) -> List[FittingData]:
        """Returns the catalog entries that belong to `category`."""
        category = FittingCategory(category)
        return [f for f in self._fittings.values() if f.category == category]

    def merge(self, other: 'FittingsCatalog') -> 'FittingsCatalog':
        """Returns a new catalog with the entries of this catalog and `other`.
        Entries of `other` replace entries with the same ID.
        """
        return FittingsCatalog(list(self._fittings.values()) + list(other.fittings.values()))

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> 'FittingsCatalog':
        """Creates a catalog from a Pandas `DataFrame`.

        The DataFrame must have the columns 'id', 'display_name', 'category'
        and 'method'. Optional columns are 'coefficient', 'default_dp' and
        'description'. Empty cells are taken as missing values.
        """
        fittings = []
        for row in df.to_dict(orient='records'):
            fittings.append(FittingData(
                id=str(row['id']),
                display_name=str(row['display_name']),
                category=row['category'],
                method=row['method'],
                coefficient=cls._floatify(row.get('coefficient')),
                default_dp=cls._floatify(row.get('default_dp')),
                description=row['description'] if isinstance(row.get('description'), str) else ''
            ))
        return cls(fittings)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], sheet_name: Union[str, int] = 0) -> 'FittingsCatalog':
        """Creates a catalog from a csv-file or a spreadsheet file. See
        `from_dataframe` for the columns of the table.
        """
        file_path = Path(file_path)
        if file_path.suffix.lower() == '.csv':
            df = pd.read_csv(file_path)
        else:
            df = pd.read_excel(io=file_path, sheet_name=sheet_name)
        return cls.from_dataframe(df)

    @staticmethod
    def _floatify(value) -> Optional[float]:
        if value is None:
            return None
        value = float(value)
        if math.isnan(value):
            return None
        return value


_E = FittingCategory.ELBOW
_T = FittingCategory.TRANSITION
_TEE = FittingCategory.TEE
_W = FittingCategory.WYE
_D = FittingCategory.DAMPER
_TERM = FittingCategory.TERMINAL
_EQ = FittingCategory.EQUIPMENT
_C = FittingMethod.C_COEFFICIENT
_DP = FittingMethod.FIXED_DP

# rectangular smooth radius elbow, 90°, without vanes
_RECT_ELBOW_R_ON_W = ((0.5, 0.57), (1.0, 0.22), (1.5, 0.13), (2.0, 0.09))
# round smooth radius elbow, 90° (SMACNA A7A)
_ROUND_ELBOW_R_ON_D = ((0.5, 0.71), (0.75, 0.33), (1.0, 0.22), (1.5, 0.15), (2.0, 0.13), (2.5, 0.12))
# parallel blade volume damper
_DAMPER_POSITION = (
    (10.0, 120.0), (20.0, 35.0), (30.0, 14.0), (40.0, 6.0), (50.0, 2.5),
    (60.0, 1.2), (70.0, 0.6), (80.0, 0.3), (90.0, 0.12), (100.0, 0.04)
)

DUCT_ELBOWS = (
    FittingData(
        'elbow_rect_radius_0.5', '90° Rectangular Elbow (R/W = 0.5)', _E, _C,
        coefficient=0.57, radius_ratio_table=_RECT_ELBOW_R_ON_W,
        description='Rectangular elbow with tight inner radius, no vanes'
    ),
    FittingData(
        'elbow_rect_radius_1.0', '90° Rectangular Elbow (R/W = 1.0)', _E, _C,
        coefficient=0.22, radius_ratio_table=_RECT_ELBOW_R_ON_W,
        description='Rectangular elbow with standard inner radius, no vanes'
    ),
    FittingData(
        'elbow_rect_radius_1.5', '90° Rectangular Elbow (R/W = 1.5)', _E, _C,
        coefficient=0.13, radius_ratio_table=_RECT_ELBOW_R_ON_W,
        description='Rectangular elbow with large radius, no vanes'
    ),
    FittingData(
        'elbow_rect_radius_2.0', '90° Rectangular Elbow (R/W = 2.0)', _E, _C,
        coefficient=0.09, radius_ratio_table=_RECT_ELBOW_R_ON_W,
        description='Rectangular elbow with very large radius, no vanes'
    ),
    FittingData(
        'elbow_rect_mitered_no_vanes', '90° Mitered Elbow (No Vanes)', _E, _C,
        coefficient=1.3, vanes_table=((False, 1.3), (True, 0.33)),
        description='Square mitered elbow without turning vanes'
    ),
    FittingData(
        'elbow_rect_mitered_single_vanes', '90° Mitered Elbow (Single Vanes)', _E, _C,
        coefficient=0.33, vanes_table=((False, 1.3), (True, 0.33)),
        description='Square mitered elbow with single-thickness turning vanes'
    ),
    FittingData(
        'elbow_rect_mitered_double_vanes', '90° Mitered Elbow (Airfoil Vanes)', _E, _C,
        coefficient=0.20, vanes_table=((False, 1.3), (True, 0.20)),
        description='Square mitered elbow with double-thickness airfoil vanes'
    ),
    FittingData('elbow_rect_45_radius', '45° Rectangular Elbow (Radius)', _E, _C, coefficient=0.08),
    FittingData('elbow_rect_45_mitered', '45° Rectangular Elbow (Mitered)', _E, _C, coefficient=0.15),
    FittingData(
        'elbow_round_smooth_90', '90° Round Elbow (Smooth)', _E, _C,
        coefficient=0.22, radius_ratio_table=_ROUND_ELBOW_R_ON_D,
        description='Smooth radius round elbow, stamped or 5-piece'
    ),
    FittingData('elbow_round_3piece_90', '90° Round Elbow (3-Piece)', _E, _C, coefficient=0.42),
    FittingData('elbow_round_5piece_90', '90° Round Elbow (5-Piece)', _E, _C, coefficient=0.32),
    FittingData('elbow_round_45', '45° Round Elbow', _E, _C, coefficient=0.10),
    FittingData(
        'elbow_flex_90', '90° Flex Duct Elbow', _E, _C, coefficient=0.75,
        description='Flexible duct bent 90 degrees'
    )
)

DUCT_TRANSITIONS = (
    FittingData('trans_rect_converging_30', 'Rectangular Transition (Converging, 30°)', _T, _C, coefficient=0.02),
    FittingData('trans_rect_converging_45', 'Rectangular Transition (Converging, 45°)', _T, _C, coefficient=0.04),
    FittingData('trans_rect_diverging_15', 'Rectangular Transition (Diverging, 15°)', _T, _C, coefficient=0.10),
    FittingData('trans_rect_diverging_30', 'Rectangular Transition (Diverging, 30°)', _T, _C, coefficient=0.25),
    FittingData('trans_rect_diverging_45', 'Rectangular Transition (Diverging, 45°)', _T, _C, coefficient=0.40),
    FittingData('trans_round_converging', 'Round Transition (Converging)', _T, _C, coefficient=0.03),
    FittingData('trans_round_diverging', 'Round Transition (Diverging)', _T, _C, coefficient=0.15),
    FittingData('trans_offset_15', 'Offset (15°)', _T, _C, coefficient=0.05),
    FittingData('trans_offset_30', 'Offset (30°)', _T, _C, coefficient=0.15),
    FittingData('trans_round_to_rect', 'Round to Rectangular Transition', _T, _C, coefficient=0.12)
)

DUCT_TEES = (
    FittingData('tee_supply_straight', 'Supply Tee - Straight Through', _TEE, _C, coefficient=0.35),
    FittingData('tee_supply_branch', 'Supply Tee - Branch', _TEE, _C, coefficient=1.0),
    FittingData('tee_supply_45_branch', 'Supply Tee - 45° Branch', _TEE, _C, coefficient=0.70),
    FittingData('tee_return_straight', 'Return Tee - Straight Through', _TEE, _C, coefficient=0.08),
    FittingData('tee_return_branch', 'Return Tee - Branch', _TEE, _C, coefficient=0.50),
    FittingData('tee_bullhead', 'Bullhead Tee', _TEE, _C, coefficient=1.8)
)

DUCT_WYES = (
    FittingData('wye_45_symmetric', '45° Wye (Symmetric)', _W, _C, coefficient=0.30),
    FittingData('wye_45_conical', '45° Conical Wye', _W, _C, coefficient=0.25),
    FittingData('wye_30_branch', '30° Wye', _W, _C, coefficient=0.20)
)

DUCT_DAMPERS = (
    FittingData(
        'damper_volume_open', 'Volume Damper (Fully Open)', _D, _C,
        coefficient=0.04, damper_position_table=_DAMPER_POSITION,
        description='Parallel blade volume damper, fully open'
    ),
    FittingData(
        'damper_volume_50', 'Volume Damper (50% Open)', _D, _C,
        coefficient=2.5, damper_position_table=_DAMPER_POSITION,
        description='Parallel blade volume damper, 50 % open'
    ),
    FittingData('damper_fire', 'Fire Damper (Curtain Type)', _D, _C, coefficient=0.15),
    FittingData('damper_fire_louver', 'Fire Damper (Multi-Blade)', _D, _C, coefficient=0.35),
    FittingData('damper_smoke', 'Smoke Damper', _D, _C, coefficient=0.20),
    FittingData('damper_combination', 'Combination Fire/Smoke Damper', _D, _C, coefficient=0.40),
    FittingData('damper_backdraft', 'Backdraft Damper', _D, _C, coefficient=0.50)
)

DUCT_TERMINALS = (
    FittingData('terminal_diffuser_ceiling', 'Ceiling Diffuser (Square)', _TERM, _DP, default_dp=0.10),
    FittingData('terminal_diffuser_round', 'Round Ceiling Diffuser', _TERM, _DP, default_dp=0.08),
    FittingData('terminal_diffuser_linear', 'Linear Slot Diffuser', _TERM, _DP, default_dp=0.12),
    FittingData('terminal_grille_return', 'Return Air Grille', _TERM, _DP, default_dp=0.05),
    FittingData('terminal_register', 'Supply Register', _TERM, _DP, default_dp=0.08),
    FittingData('terminal_louver_intake', 'Outside Air Louver', _TERM, _DP, default_dp=0.15),
    FittingData('terminal_louver_exhaust', 'Exhaust Louver', _TERM, _DP, default_dp=0.10)
)

DUCT_EQUIPMENT = (
    FittingData('equip_coil_2row', 'Cooling Coil (2-Row)', _EQ, _DP, default_dp=0.25),
    FittingData('equip_coil_4row', 'Cooling Coil (4-Row)', _EQ, _DP, default_dp=0.45),
    FittingData('equip_coil_6row', 'Cooling Coil (6-Row)', _EQ, _DP, default_dp=0.70),
    FittingData('equip_coil_heating', 'Heating Coil (1-Row)', _EQ, _DP, default_dp=0.15),
    FittingData('equip_filter_merv8_clean', 'Filter MERV 8 (Clean)', _EQ, _DP, default_dp=0.15),
    FittingData('equip_filter_merv8_dirty', 'Filter MERV 8 (Dirty)', _EQ, _DP, default_dp=0.50),
    FittingData('equip_filter_merv13_clean', 'Filter MERV 13 (Clean)', _EQ, _DP, default_dp=0.30),
    FittingData('equip_filter_merv13_dirty', 'Filter MERV 13 (Dirty)', _EQ, _DP, default_dp=0.80),
    FittingData('equip_filter_merv16_clean', 'Filter MERV 16 (Clean)', _EQ, _DP, default_dp=0.45),
    FittingData('equip_filter_merv16_dirty', 'Filter MERV 16 (Dirty)', _EQ, _DP, default_dp=1.00),
    FittingData('equip_vav_box', 'VAV Box', _EQ, _DP, default_dp=0.50),
    FittingData('equip_silencer', 'Sound Attenuator (Silencer)', _EQ, _DP, default_dp=0.35),
    FittingData('equip_mixing_box', 'Mixing Box', _EQ, _DP, default_dp=0.25),
    FittingData('equip_electric_heater', 'Electric Duct Heater', _EQ, _DP, default_dp=0.08),
    FittingData('equip_humidifier', 'Steam Humidifier Manifold', _EQ, _DP, default_dp=0.10)
)

DEFAULT_FITTINGS_CATALOG = FittingsCatalog(
    DUCT_ELBOWS
    + DUCT_TRANSITIONS
    + DUCT_TEES
    + DUCT_WYES
    + DUCT_DAMPERS
    + DUCT_TERMINALS
    + DUCT_EQUIPMENT
)
