from .coefficient import Pairing, Relationship, parse_relationship
from .term import Term, TermBuilder, calculate_euler_term, calculate_exponent_term
from .wave_packet import WavePacket, WavePacketBuilder
from .symmetry import Symmetry, FRIEZE_SYMMETRIES, parse_symmetry
from .lattice import Lattice, convert_to_lattice_coordinates, validate_lattice_vectors
from .arbitrary import Arbitrary, Identity
from .rosette import Frieze, Rosette
from .wallpaper import Generic, Hexagonal, Rectangular, Rhombic, Square, WallpaperFormula
from .builder import Builder, FORMULA_TYPES
from .errors import (
    FormulaError,
    DegenerateLatticeError,
    MissingDimensionError,
    UnsupportedSymmetryError,
    EmptyWavePacketError,
    DeserializationError,
)

__all__ = [
    # Coefficient algebra
    'Pairing',
    'Relationship',
    'parse_relationship',
    # Terms and wave packets
    'Term',
    'TermBuilder',
    'calculate_euler_term',
    'calculate_exponent_term',
    'WavePacket',
    'WavePacketBuilder',
    # Symmetry
    'Symmetry',
    'FRIEZE_SYMMETRIES',
    'parse_symmetry',
    # Lattices
    'Lattice',
    'convert_to_lattice_coordinates',
    'validate_lattice_vectors',
    # Formulas
    'Arbitrary',
    'Identity',
    'Rosette',
    'Frieze',
    'WallpaperFormula',
    'Square',
    'Rectangular',
    'Rhombic',
    'Hexagonal',
    'Generic',
    'Builder',
    'FORMULA_TYPES',
    # Errors
    'FormulaError',
    'DegenerateLatticeError',
    'MissingDimensionError',
    'UnsupportedSymmetryError',
    'EmptyWavePacketError',
    'DeserializationError',
]
