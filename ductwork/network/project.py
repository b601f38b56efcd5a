"""Project context that owns duct systems, their sections and fittings.

A `DuctProject` keeps the records of a project in id-keyed maps and caches
the last calculation result of each duct system. Every change to a system,
or to one of its sections or fittings, discards the cached result of that
system. A new result is only calculated when `recompute` is called.

Example
-------
    project = DuctProject()
    system = project.create_system('AHU-1 supply', altitude_ft=1500)
    section = project.add_section(system.id, width_in=16, height_in=12, length_ft=40)
    project.add_fitting(section.id, 'elbow_rect_radius_1.0', quantity=2)
    result = project.recompute(system.id)
"""
from typing import Dict, List, Optional, Iterable, Any
from dataclasses import replace
import uuid
from ductwork.model import DuctSystem, DuctSection, DuctFitting, SectionType
from ductwork.catalog import FittingsCatalog, MaterialsCatalog
from ductwork.settings import CalculationSettings
from ductwork.exceptions import ItemNotFoundError
from ductwork.logging import ModuleLogger
from .duct_system import DuctCalculationResult, calculate_duct_system

logger = ModuleLogger.get_logger(__name__)
logger.setLevel(ModuleLogger.WARNING)

SYSTEM_DEFAULTS = {
    'system_type': 'supply',
    'total_cfm': 1000.0,
    'altitude_ft': 0.0,
    'temperature_f': 70.0,
    'safety_factor': 0.15
}

SECTION_DEFAULTS = {
    'cfm': 1000.0,
    'shape': 'rectangular',
    'width_in': 12.0,
    'height_in': 12.0,
    'diameter_in': 12.0,
    'material': 'galvanized',
    'liner': 'none'
}

# fields of a new section that are copied from the last section of the system
_INHERITED_FIELDS = tuple(SECTION_DEFAULTS.keys())

DEFAULT_SECTION_LENGTH = 10.0


def _new_id() -> str:
    return str(uuid.uuid4())


def _check_identity(changes: Dict[str, Any], identity_fields: Iterable[str]) -> None:
    fixed = [name for name in identity_fields if name in changes]
    if fixed:
        raise ValueError(f"identity field(s) {', '.join(fixed)} cannot be changed")


class DuctProject:
    """Owns the duct systems of a project with their sections and fittings.

    Parameters
    ----------
    fittings_catalog: optional
        Fittings catalog used in the calculations of the project.
    materials_catalog: optional
        Materials catalog used in the calculations of the project.
    settings: optional
        Calculation settings used in the calculations of the project.
    """

    def __init__(
        self,
        fittings_catalog: Optional[FittingsCatalog] = None,
        materials_catalog: Optional[MaterialsCatalog] = None,
        settings: Optional[CalculationSettings] = None
    ) -> None:
        self.fittings_catalog = fittings_catalog
        self.materials_catalog = materials_catalog
        self.settings = settings
        self.systems: Dict[str, DuctSystem] = {}
        self.sections: Dict[str, DuctSection] = {}
        self.fittings: Dict[str, DuctFitting] = {}
        self._results: Dict[str, DuctCalculationResult] = {}

    # ---------------------------------------------------------------- systems

    def get_system(self, system_id: str) -> DuctSystem:
        try:
            return self.systems[system_id]
        except KeyError:
            raise ItemNotFoundError(f"duct system '{system_id}' not found") from None

    def create_system(self, name: str = 'New Duct System', **fields: Any) -> DuctSystem:
        """Creates a new duct system and adds it to the project. Fields that
        are not given get their default value (supply system, 1000 CFM, sea
        level, 70 °F, 15 % safety factor).
        """
        kwargs = {**SYSTEM_DEFAULTS, **fields}
        kwargs.setdefault('id', _new_id())
        system = DuctSystem(name=name, **kwargs)
        if system.id in self.systems:
            raise ValueError(f"duct system '{system.id}' already exists")
        self.systems[system.id] = system
        return system

    def update_system(self, system_id: str, **changes: Any) -> DuctSystem:
        _check_identity(changes, ('id',))
        system = replace(self.get_system(system_id), **changes)
        self.systems[system_id] = system
        self._invalidate(system_id)
        return system

    def delete_system(self, system_id: str) -> None:
        """Removes the duct system together with its sections and their
        fittings.
        """
        self.get_system(system_id)
        for section in self._system_sections(system_id):
            self._remove_section(section.id)
        del self.systems[system_id]
        self._results.pop(system_id, None)

    # --------------------------------------------------------------- sections

    def get_section(self, section_id: str) -> DuctSection:
        try:
            return self.sections[section_id]
        except KeyError:
            raise ItemNotFoundError(f"duct section '{section_id}' not found") from None

    def get_sections(self, system_id: str) -> List[DuctSection]:
        """Returns the sections of the duct system in flow path order, each
        with its fittings.
        """
        self.get_system(system_id)
        return [self._with_fittings(s) for s in self._system_sections(system_id)]

    def add_section(
        self,
        system_id: str,
        section_type: str = 'straight',
        name: Optional[str] = None,
        **fields: Any
    ) -> DuctSection:
        """Adds a new section at the end of the flow path of a duct system.

        Fields that are not given are copied from the last section of the
        system (airflow, shape, dimensions, material and liner), or get their
        default value if the system has no sections yet. The length defaults
        to 10 ft and the name to 'Section <n>'.

        Raises
        ------
        ItemNotFoundError
            If the duct system is not in the project.
        ValueError
            If the sort order is already taken by another section of the
            system.
        """
        self.get_system(system_id)
        _check_identity(fields, ('system_id', 'fittings'))
        existing = self._system_sections(system_id)
        if existing:
            last = existing[-1]
            inherited = {key: getattr(last, key) for key in _INHERITED_FIELDS}
        else:
            inherited = dict(SECTION_DEFAULTS)
        kwargs = {
            **inherited,
            'length_ft': DEFAULT_SECTION_LENGTH,
            'sort_order': max((s.sort_order for s in existing), default=-1) + 1,
            **fields
        }
        kwargs.setdefault('id', _new_id())
        if kwargs['id'] in self.sections:
            raise ValueError(f"duct section '{kwargs['id']}' already exists")
        self._check_sort_order(system_id, kwargs['sort_order'])
        section = DuctSection(
            system_id=system_id,
            name=name if name is not None else f'Section {len(existing) + 1}',
            section_type=SectionType(section_type),
            **kwargs
        )
        self.sections[section.id] = section
        self._invalidate(system_id)
        return section

    def update_section(self, section_id: str, **changes: Any) -> DuctSection:
        """Replaces fields of a section. Fittings are changed with
        `add_fitting`, `update_fitting` and `delete_fitting`.
        """
        _check_identity(changes, ('id', 'system_id', 'fittings'))
        section = self.get_section(section_id)
        if 'sort_order' in changes:
            self._check_sort_order(section.system_id, changes['sort_order'], section_id)
        section = replace(section, **changes)
        self.sections[section_id] = section
        self._invalidate(section.system_id)
        return section

    def delete_section(self, section_id: str) -> None:
        """Removes the section together with its fittings."""
        section = self.get_section(section_id)
        self._remove_section(section_id)
        self._invalidate(section.system_id)

    def reorder_sections(self, system_id: str, ordered_ids: List[str]) -> None:
        """Puts the sections of the duct system in the order of
        `ordered_ids`, which must contain the IDs of all the sections of the
        system, each exactly once.
        """
        self.get_system(system_id)
        current = {s.id for s in self._system_sections(system_id)}
        if len(ordered_ids) != len(set(ordered_ids)) or set(ordered_ids) != current:
            raise ValueError(
                f"ordered IDs must contain each section of duct system "
                f"'{system_id}' exactly once"
            )
        for i, section_id in enumerate(ordered_ids):
            self.sections[section_id] = replace(self.sections[section_id], sort_order=i)
        self._invalidate(system_id)

    # --------------------------------------------------------------- fittings

    def get_fitting(self, fitting_id: str) -> DuctFitting:
        try:
            return self.fittings[fitting_id]
        except KeyError:
            raise ItemNotFoundError(f"duct fitting '{fitting_id}' not found") from None

    def get_fittings(self, section_id: str) -> List[DuctFitting]:
        self.get_section(section_id)
        return [f for f in self.fittings.values() if f.section_id == section_id]

    def add_fitting(
        self,
        section_id: str,
        fitting_type: str,
        quantity: int = 1,
        **overrides: Any
    ) -> DuctFitting:
        """Adds a fitting of the given type to a section. Keyword arguments
        `overrides` set the overrides of the fitting, e.g.
        `coefficient_override` or `damper_position_pct`.
        """
        section = self.get_section(section_id)
        _check_identity(overrides, ('section_id',))
        overrides.setdefault('id', _new_id())
        if overrides['id'] in self.fittings:
            raise ValueError(f"duct fitting '{overrides['id']}' already exists")
        fitting = DuctFitting(
            section_id=section_id,
            fitting_type=fitting_type,
            quantity=quantity,
            **overrides
        )
        self.fittings[fitting.id] = fitting
        self._invalidate(section.system_id)
        return fitting

    def update_fitting(self, fitting_id: str, **changes: Any) -> DuctFitting:
        _check_identity(changes, ('id', 'section_id'))
        fitting = replace(self.get_fitting(fitting_id), **changes)
        self.fittings[fitting_id] = fitting
        self._invalidate(self.sections[fitting.section_id].system_id)
        return fitting

    def delete_fitting(self, fitting_id: str) -> None:
        fitting = self.get_fitting(fitting_id)
        del self.fittings[fitting_id]
        self._invalidate(self.sections[fitting.section_id].system_id)

    # ------------------------------------------------------------ calculation

    def recompute(self, system_id: str) -> DuctCalculationResult:
        """Calculates the duct system with the current state of its sections
        and fittings, caches the result and returns it.

        Raises
        ------
        ComputationError
            If the air properties of the system cannot be determined.
        """
        system = self.get_system(system_id)
        result = calculate_duct_system(
            system,
            self.get_sections(system_id),
            fittings_catalog=self.fittings_catalog,
            materials_catalog=self.materials_catalog,
            settings=self.settings
        )
        self._results[system_id] = result
        logger.debug(f"recomputed duct system '{system_id}'")
        return result

    def get_result(self, system_id: str) -> Optional[DuctCalculationResult]:
        """Returns the cached result of the duct system, or `None` if the
        system was changed since the last call to `recompute`.
        """
        self.get_system(system_id)
        return self._results.get(system_id)

    # ---------------------------------------------------------------- private

    def _invalidate(self, system_id: str) -> None:
        self._results.pop(system_id, None)

    def _system_sections(self, system_id: str) -> List[DuctSection]:
        sections = [s for s in self.sections.values() if s.system_id == system_id]
        return sorted(sections, key=lambda s: s.sort_order)

    def _with_fittings(self, section: DuctSection) -> DuctSection:
        fittings = tuple(f for f in self.fittings.values() if f.section_id == section.id)
        return replace(section, fittings=fittings)

    def _check_sort_order(self, system_id: str, sort_order: int, section_id: Optional[str] = None) -> None:
        for s in self._system_sections(system_id):
            if s.sort_order == sort_order and s.id != section_id:
                raise ValueError(
                    f"sort order {sort_order} is already taken by section "
                    f"'{s.id}' of duct system '{system_id}'"
                )

    def _remove_section(self, section_id: str) -> None:
        for fitting_id in [f.id for f in self.fittings.values() if f.section_id == section_id]:
            del self.fittings[fitting_id]
        del self.sections[section_id]
