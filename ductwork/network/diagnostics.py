from typing import Optional
from dataclasses import dataclass
from enum import Enum


class WarningCode(Enum):
    """Kinds of advisory warnings produced by a duct system calculation."""
    VELOCITY_ABOVE_MAXIMUM = 'velocity_above_maximum'
    VELOCITY_BELOW_RECOMMENDED = 'velocity_below_recommended'
    FLEX_LENGTH_EXCEEDED = 'flex_length_exceeded'
    MATERIAL_VELOCITY_EXCEEDED = 'material_velocity_exceeded'
    INVALID_GEOMETRY = 'invalid_geometry'
    INVALID_AIRFLOW = 'invalid_airflow'
    UNKNOWN_FITTING = 'unknown_fitting'
    UNKNOWN_MATERIAL = 'unknown_material'
    UNKNOWN_EQUIPMENT = 'unknown_equipment'
    DUPLICATE_SORT_ORDER = 'duplicate_sort_order'


@dataclass(frozen=True)
class DuctWarning:
    """Advisory warning about a duct system or one of its sections.

    Warnings never interrupt a calculation; they are collected in the
    calculation result.

    Attributes
    ----------
    code:
        Kind of warning.
    message:
        Human-readable explanation.
    section_id: optional
        ID of the section the warning is about; `None` for warnings about
        the system as a whole.
    """
    code: WarningCode
    message: str
    section_id: Optional[str] = None

    def __str__(self):
        return self.message
