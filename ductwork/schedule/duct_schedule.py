from typing import List, Dict, Optional, Union
from pathlib import Path
import pandas as pd
from ductwork import Quantity


class DuctSchedule:
    """Schedule of commercially available duct sizes."""

    def __init__(self, unit: str = 'inch', lookup_list: Optional[List[float]] = None):
        """Creates a `DuctSchedule` instance.

        Parameters
        ----------
        unit:
            The length unit in which the sizes of the schedule are expressed.
        lookup_list:
            The available sizes.
        """
        self.lookup_list: List[float] = sorted(lookup_list or [])
        self.unit = unit

    def get_closest_internal_size(self, calculated_size: Quantity) -> Quantity:
        """Get the internal size that is closest to the calculated size."""
        calculated_size = calculated_size.to(self.unit).magnitude
        delta = [
            abs(calculated_size - lookup_size)
            for lookup_size in self.lookup_list
        ]
        index = delta.index(min(delta))
        available_size = self.lookup_list[index]
        return Quantity(available_size, self.unit)

    def get_next_larger_size(self, calculated_size: Quantity) -> Optional[Quantity]:
        """Get the smallest available size that is not smaller than the
        calculated size. Returns `None` if the calculated size is larger than
        the largest size in the schedule.
        """
        calculated_size = calculated_size.to(self.unit).magnitude
        for lookup_size in self.lookup_list:
            if lookup_size >= calculated_size:
                return Quantity(lookup_size, self.unit)
        return None


# standard diameters of round ducts
round_duct_schedule = DuctSchedule(lookup_list=[
    4, 5, 6, 7, 8, 9, 10, 12, 14, 16, 18, 20, 22, 24,
    26, 28, 30, 32, 34, 36, 38, 40, 42, 44, 46, 48,
    50, 52, 54, 56, 58, 60
])  # inch

# standard side lengths of rectangular ducts
rectangular_duct_schedule = DuctSchedule(lookup_list=[
    4, 6, 8, 10, 12, 14, 16, 18, 20, 22, 24, 26, 28, 30,
    32, 34, 36, 38, 40, 42, 44, 46, 48, 52, 56, 60, 64, 68,
    72, 80, 84, 96
])  # inch


class DuctScheduleFactory:
    """Class for storing duct schedules at run-time and read user defined duct
    schedules from file.
    """
    schedules: Dict[str, DuctSchedule] = {
        'default_round': round_duct_schedule,
        'default_rectangular': rectangular_duct_schedule
    }

    @classmethod
    def get(
        cls,
        name: str,
        file_path: Optional[Union[str, Path]] = None,
        sheet_name: Union[str, int] = 0,
        unit: str = 'inch'
    ) -> Optional[DuctSchedule]:
        """Get a schedule from a file or one of the default schedules.

        Parameters
        ----------
        name:
            Identifier of the schedule. The names of the default schedules
            already present are:
            - 'default_round' for round ducts
            - 'default_rectangular' for rectangular ducts
        file_path: optional, default None
            Path to a csv-file or spreadsheet file with the commercially
            available sizes of a duct schedule.
        sheet_name:
            The name or index of the sheet (spreadsheet files only).
        unit:
            The measuring unit in which the values in the file are expressed.

        Returns
        -------
        DuctSchedule, or None if `name` is unknown and no file is given.

        Notes
        -----
        The file must only contain a single list of values (i.e. diameters or
        side lengths of the duct cross-sections) in the first column,
        starting at the first row (so don't use a header).
        """
        if name not in cls.schedules and file_path is not None:
            file_path = Path(file_path)
            if file_path.suffix.lower() == '.csv':
                df = pd.read_csv(file_path, header=None)
            else:
                df = pd.read_excel(
                    io=file_path,
                    sheet_name=sheet_name,
                    header=None
                )
            duct_schedule = DuctSchedule(unit, df.iloc[:, 0].astype(float).tolist())
            cls.schedules[name] = duct_schedule
        return cls.schedules.get(name)
