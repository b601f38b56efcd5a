"""Catalog of duct materials and duct liners.

Absolute roughness values according to ASHRAE Fundamentals and SMACNA.
"""
from typing import Iterable, Optional, Mapping, Union
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
import math
import pandas as pd
from ductwork.model import DuctLiner


@dataclass(frozen=True)
class MaterialData:
    """Properties of a duct material.

    Attributes
    ----------
    id:
        Key of the material in the catalog.
    display_name:
        Descriptive name.
    roughness_ft:
        Absolute roughness of the inner duct surface in feet.
    max_velocity_fpm: optional
        Maximum recommended air velocity in ducts of this material.
    """
    id: str
    display_name: str
    roughness_ft: float
    max_velocity_fpm: Optional[float] = None
    description: str = ''


@dataclass(frozen=True)
class LinerData:
    """Properties of a duct liner.

    Attributes
    ----------
    id:
        The liner.
    display_name:
        Descriptive name.
    thickness_in:
        Thickness of the liner in inches. The liner reduces the clear
        interior dimensions of the duct by twice this thickness.
    roughness_ft: optional
        Absolute roughness of the liner surface in feet. `None` means that
        the roughness of the duct material applies.
    """
    id: DuctLiner
    display_name: str
    thickness_in: float
    roughness_ft: Optional[float] = None


NO_LINER = LinerData(DuctLiner.NONE, 'No Liner', 0.0, None)


class MaterialsCatalog:
    """Read-only catalog of duct materials and duct liners."""

    def __init__(
        self,
        materials: Iterable[MaterialData],
        liners: Iterable[LinerData] = (NO_LINER,)
    ) -> None:
        self._materials = MappingProxyType({m.id: m for m in materials})
        self._liners = MappingProxyType({liner.id: liner for liner in liners})

    @property
    def materials(self) -> Mapping[str, MaterialData]:
        return self._materials

    @property
    def liners(self) -> Mapping[DuctLiner, LinerData]:
        return self._liners

    def __contains__(self, material: str) -> bool:
        return material in self._materials

    def get_material(self, material: str) -> Optional[MaterialData]:
        """Returns the `MaterialData` of `material`, or `None` if the material
        is not in the catalog.
        """
        return self._materials.get(material)

    def get_liner(self, liner: DuctLiner) -> LinerData:
        """Returns the `LinerData` of `liner`. A liner that is missing from the
        catalog is taken as having no thickness.
        """
        return self._liners.get(DuctLiner(liner), NO_LINER)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        liners: Optional[Iterable[LinerData]] = None
    ) -> 'MaterialsCatalog':
        """Creates a catalog of materials from a Pandas `DataFrame`.

        The DataFrame must have the columns 'id', 'display_name' and
        'roughness_ft'. Optional columns are 'max_velocity_fpm' and
        'description'. If `liners` is None, the catalog gets the default
        duct liners of the package.
        """
        materials = []
        for row in df.to_dict(orient='records'):
            max_velocity = row.get('max_velocity_fpm')
            if max_velocity is not None and math.isnan(float(max_velocity)):
                max_velocity = None
            materials.append(MaterialData(
                id=str(row['id']),
                display_name=str(row['display_name']),
                roughness_ft=float(row['roughness_ft']),
                max_velocity_fpm=float(max_velocity) if max_velocity is not None else None,
                description=row['description'] if isinstance(row.get('description'), str) else ''
            ))
        return cls(materials, liners if liners is not None else DUCT_LINERS)

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        sheet_name: Union[str, int] = 0,
        liners: Optional[Iterable[LinerData]] = None
    ) -> 'MaterialsCatalog':
        """Creates a catalog of materials from a csv-file or a spreadsheet
        file. See `from_dataframe` for the columns of the table.
        """
        file_path = Path(file_path)
        if file_path.suffix.lower() == '.csv':
            df = pd.read_csv(file_path)
        else:
            df = pd.read_excel(io=file_path, sheet_name=sheet_name)
        return cls.from_dataframe(df, liners)


DUCT_MATERIALS = (
    MaterialData(
        'galvanized', 'Galvanized Steel', 0.0003, 2500.0,
        'Standard galvanized sheet metal duct (0.09 mm)'
    ),
    MaterialData(
        'aluminum', 'Aluminum', 0.0001, 2500.0,
        'Smooth aluminum duct (0.03 mm)'
    ),
    MaterialData(
        'stainless', 'Stainless Steel', 0.00015, 2500.0,
        'Stainless steel duct for corrosive or sanitary environments (0.045 mm)'
    ),
    MaterialData(
        'fiberglass', 'Fiberglass Duct Board', 0.003, 2000.0,
        'Internal surface of fiberglass duct board (0.9 mm)'
    ),
    MaterialData(
        'flex', 'Flexible Duct', 0.003, 1500.0,
        'Flexible insulated duct, fully extended (0.9 mm)'
    )
)

DUCT_LINERS = (
    NO_LINER,
    LinerData(DuctLiner.LINER_0_75, '3/4" Liner', 0.75, 0.003),
    LinerData(DuctLiner.LINER_1_0, '1" Liner', 1.0, 0.003)
)

DEFAULT_MATERIALS_CATALOG = MaterialsCatalog(DUCT_MATERIALS, DUCT_LINERS)
