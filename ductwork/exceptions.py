class DuctworkError(Exception):
    """Base class of all exceptions raised by the package."""
    pass


class ComputationError(DuctworkError):
    """Raised when the inputs of a calculation are physically impossible, e.g.
    an air temperature at or below absolute zero. A `ComputationError` aborts
    the calculation.
    """
    pass


class InvalidGeometryError(DuctworkError):
    """Raised when the clear interior dimensions of a duct section are missing
    or not positive (after the liner has been taken into account).
    """
    pass


class UnknownFittingError(DuctworkError):
    """Raised when a fitting type cannot be found in the fittings catalog."""
    pass


class ItemNotFoundError(DuctworkError, KeyError):
    """Raised when a system, section or fitting ID is not present in a
    project.
    """
    pass
