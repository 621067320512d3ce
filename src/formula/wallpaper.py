"""
Wallpaper formulas: wave packets evaluated on one of five lattices.

Each variant fixes:
- its lattice basis (some need a width and/or height),
- the coefficient relationships locked into every packet, which give the
  lattice its base rotation (4-fold for square, 3-fold for hexagonal),
- the desired symmetries it accepts,
- the relationships used to detect further symmetries between packets.

Construction validates dimensions, then the desired symmetry, then the
lattice, expands the packets for the desired symmetry and finally locks them.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from .arbitrary import Arbitrary
from .coefficient import Relationship
from .errors import EmptyWavePacketError, MissingDimensionError, UnsupportedSymmetryError
from .lattice import Lattice, calculate_coordinate_using_wave_packets, lock_terms_based_on_relationship
from .symmetry import Symmetry, create_new_wave_packets_based_on_desired_symmetry, has_symmetry
from .term import ComplexInput
from .wave_packet import WavePacket

logger = logging.getLogger(__name__)


class WallpaperFormula(Arbitrary):
    """Shared behaviour of the lattice formulas. Use a subclass's ``create``."""

    LATTICE_NAME = "wallpaper"
    LOCKED_RELATIONSHIPS: List[Relationship] = []
    VALID_DESIRED_SYMMETRIES: List[Symmetry] = [Symmetry.P1]
    BASE_SYMMETRIES: List[Symmetry] = [Symmetry.P1]
    # Checked in insertion order.
    SYMMETRY_RELATIONSHIPS: Dict[Symmetry, List[Relationship]] = {}

    def __init__(self, lattice: Lattice, wave_packets: Sequence[WavePacket],
                 multiplier: complex = complex(1, 0)):
        self.lattice = lattice
        self.packets = tuple(wave_packets)
        self.multiplier = complex(multiplier)

    @classmethod
    def _validate_desired_symmetry(cls, desired_symmetry: Optional[Symmetry]) -> None:
        if desired_symmetry is None or desired_symmetry in cls.VALID_DESIRED_SYMMETRIES:
            return
        valid = ", ".join(symmetry.value for symmetry in cls.VALID_DESIRED_SYMMETRIES)
        raise UnsupportedSymmetryError(
            f"{cls.LATTICE_NAME} lattice can apply these desired symmetries: {valid}")

    @classmethod
    def _create(cls, lattice: Lattice, wave_packets: Sequence[WavePacket],
                desired_symmetry: Optional[Symmetry], multiplier: complex) -> 'WallpaperFormula':
        cls._validate_desired_symmetry(desired_symmetry)
        lattice.validate()
        if any(not packet.terms for packet in wave_packets):
            raise EmptyWavePacketError("wave packet must have at least one term")

        packets = create_new_wave_packets_based_on_desired_symmetry(wave_packets, desired_symmetry)
        if cls.LOCKED_RELATIONSHIPS:
            packets = lock_terms_based_on_relationship(cls.LOCKED_RELATIONSHIPS, packets)

        logger.debug("%s formula: %d wave packets (desired symmetry %s)",
                     cls.LATTICE_NAME, len(packets),
                     desired_symmetry.value if desired_symmetry else "none")
        return cls(lattice, packets, multiplier)

    def calculate(self, z: ComplexInput) -> ComplexInput:
        return calculate_coordinate_using_wave_packets(z, self.lattice.vectors, self.packets) * self.multiplier

    def wave_packets(self) -> List[WavePacket]:
        return list(self.packets)

    def lattice_vectors(self) -> List[complex]:
        return self.lattice.vectors

    def symmetries_found(self) -> List[Symmetry]:
        found = list(self.BASE_SYMMETRIES)
        for symmetry in self.SYMMETRY_RELATIONSHIPS:
            if has_symmetry(self.packets, symmetry, self.SYMMETRY_RELATIONSHIPS):
                found.append(symmetry)
        return found

    def __eq__(self, other):
        return (type(self) is type(other) and self.lattice == other.lattice
                and self.packets == other.packets and self.multiplier == other.multiplier)

    def __repr__(self):
        return (f"{type(self).__name__}(lattice={self.lattice!r}, "
                f"wave_packets={len(self.packets)}, multiplier={self.multiplier!r})")


class Square(WallpaperFormula):
    """Unit square lattice, 4-fold rotation built in."""

    LATTICE_NAME = "square"
    LOCKED_RELATIONSHIPS = [
        Relationship.PLUS_M_MINUS_N,
        Relationship.MINUS_N_MINUS_M,
        Relationship.MINUS_M_PLUS_N,
    ]
    VALID_DESIRED_SYMMETRIES = [Symmetry.P1, Symmetry.P4, Symmetry.P4M, Symmetry.P4G]
    BASE_SYMMETRIES = [Symmetry.P1, Symmetry.P4]
    SYMMETRY_RELATIONSHIPS = {
        Symmetry.P4M: [Relationship.PLUS_M_PLUS_N],
        Symmetry.P4G: [Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE],
    }

    @classmethod
    def create(cls, wave_packets: Sequence[WavePacket], desired_symmetry: Optional[Symmetry] = None,
               multiplier: complex = complex(1, 0)) -> 'Square':
        return cls._create(Lattice(complex(1, 0), complex(0, 1)), wave_packets, desired_symmetry, multiplier)


class Rectangular(WallpaperFormula):
    """Lattice (1, 0), (0, height)."""

    LATTICE_NAME = "rectangular"
    VALID_DESIRED_SYMMETRIES = [Symmetry.P1, Symmetry.PM, Symmetry.PG, Symmetry.PMM, Symmetry.PMG, Symmetry.PGG]
    SYMMETRY_RELATIONSHIPS = {
        Symmetry.PM: [Relationship.PLUS_N_MINUS_M],
        Symmetry.PG: [Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N],
        Symmetry.PMM: [
            Relationship.PLUS_N_MINUS_M,
            Relationship.MINUS_N_MINUS_M,
            Relationship.MINUS_N_PLUS_M,
        ],
        Symmetry.PMG: [
            Relationship.MINUS_N_MINUS_M,
            Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N,
            Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N,
        ],
        Symmetry.PGG: [
            Relationship.MINUS_N_MINUS_M,
            Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM,
            Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM,
        ],
    }

    @classmethod
    def create(cls, wave_packets: Sequence[WavePacket], lattice_height: float,
               desired_symmetry: Optional[Symmetry] = None,
               multiplier: complex = complex(1, 0)) -> 'Rectangular':
        if lattice_height == 0:
            raise MissingDimensionError("rectangular lattice must specify height")
        lattice = Lattice(complex(1, 0), complex(0, lattice_height))
        return cls._create(lattice, wave_packets, desired_symmetry, multiplier)


class Rhombic(WallpaperFormula):
    """Lattice (0.5, height), (0.5, -height); packets are locked with their swapped twin."""

    LATTICE_NAME = "rhombic"
    LOCKED_RELATIONSHIPS = [Relationship.PLUS_M_PLUS_N]
    VALID_DESIRED_SYMMETRIES = [Symmetry.P1, Symmetry.CM, Symmetry.CMM]
    SYMMETRY_RELATIONSHIPS = {
        Symmetry.CM: [Relationship.PLUS_M_PLUS_N],
        Symmetry.CMM: [
            Relationship.MINUS_N_MINUS_M,
            Relationship.MINUS_M_MINUS_N,
            Relationship.PLUS_M_PLUS_N,
        ],
    }

    @classmethod
    def create(cls, wave_packets: Sequence[WavePacket], lattice_height: float,
               desired_symmetry: Optional[Symmetry] = None,
               multiplier: complex = complex(1, 0)) -> 'Rhombic':
        if lattice_height == 0:
            raise MissingDimensionError("rhombic lattice must specify height")
        lattice = Lattice(complex(0.5, lattice_height), complex(0.5, -lattice_height))
        return cls._create(lattice, wave_packets, desired_symmetry, multiplier)


class Hexagonal(WallpaperFormula):
    """Lattice (1, 0), (-1/2, sqrt(3)/2), 3-fold rotation built in."""

    LATTICE_NAME = "hexagonal"
    LOCKED_RELATIONSHIPS = [
        Relationship.PLUS_M_MINUS_SUM_N_AND_M,
        Relationship.MINUS_SUM_N_AND_M_PLUS_N,
    ]
    VALID_DESIRED_SYMMETRIES = [Symmetry.P1, Symmetry.P3, Symmetry.P31M, Symmetry.P3M1, Symmetry.P6, Symmetry.P6M]
    BASE_SYMMETRIES = [Symmetry.P1, Symmetry.P3]
    SYMMETRY_RELATIONSHIPS = {
        Symmetry.P31M: [Relationship.PLUS_M_PLUS_N],
        Symmetry.P3M1: [Relationship.MINUS_M_MINUS_N],
        Symmetry.P6: [Relationship.MINUS_N_MINUS_M],
        Symmetry.P6M: [
            Relationship.MINUS_N_MINUS_M,
            Relationship.MINUS_M_MINUS_N,
            Relationship.PLUS_M_PLUS_N,
        ],
    }

    @classmethod
    def create(cls, wave_packets: Sequence[WavePacket], desired_symmetry: Optional[Symmetry] = None,
               multiplier: complex = complex(1, 0)) -> 'Hexagonal':
        lattice = Lattice(complex(1, 0), complex(-0.5, math.sqrt(3.0) / 2.0))
        return cls._create(lattice, wave_packets, desired_symmetry, multiplier)


class Generic(WallpaperFormula):
    """Oblique lattice (1, 0), (width, height)."""

    LATTICE_NAME = "generic"
    VALID_DESIRED_SYMMETRIES = [Symmetry.P1, Symmetry.P2]
    SYMMETRY_RELATIONSHIPS = {
        Symmetry.P2: [Relationship.MINUS_N_MINUS_M],
    }

    @classmethod
    def create(cls, wave_packets: Sequence[WavePacket], lattice_width: float, lattice_height: float,
               desired_symmetry: Optional[Symmetry] = None,
               multiplier: complex = complex(1, 0)) -> 'Generic':
        if lattice_width == 0 or lattice_height == 0:
            raise MissingDimensionError("generic lattice must specify dimensions")
        lattice = Lattice(complex(1, 0), complex(lattice_width, lattice_height))
        return cls._create(lattice, wave_packets, desired_symmetry, multiplier)
