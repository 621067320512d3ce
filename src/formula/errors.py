"""
Errors raised while building formulas.

Every construction failure derives from FormulaError, a ValueError subclass.
"""


class FormulaError(ValueError):
    """Base class for formula construction failures."""


class DegenerateLatticeError(FormulaError):
    """A lattice vector is zero or the two vectors are collinear."""


class MissingDimensionError(FormulaError):
    """A lattice that needs a width or height was given zero."""


class UnsupportedSymmetryError(FormulaError):
    """The requested symmetry is unknown or not valid for the lattice."""


class EmptyWavePacketError(FormulaError):
    """A wave packet was built without any terms."""


class DeserializationError(FormulaError):
    """A YAML/JSON document could not be turned into a formula or command."""
