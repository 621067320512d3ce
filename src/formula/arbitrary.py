"""
The interface every formula implements, plus the Identity formula.
"""

from abc import ABC, abstractmethod
from typing import List

from .symmetry import Symmetry
from .term import ComplexInput, Term
from .wave_packet import WavePacket


class Arbitrary(ABC):
    """
    A formula maps complex points to complex points.

    ``calculate`` accepts a complex scalar or a numpy array of complex values
    and never raises; out-of-domain points come back as inf/nan.
    """

    @abstractmethod
    def calculate(self, z: ComplexInput) -> ComplexInput:
        """Transform a point (or array of points)."""

    def formula_level_terms(self) -> List[Term]:
        return []

    def wave_packets(self) -> List[WavePacket]:
        return []

    def lattice_vectors(self) -> List[complex]:
        return []

    def symmetries_found(self) -> List[Symmetry]:
        return []


class Identity(Arbitrary):
    """Returns every point unchanged. Used as the fallback when a build fails."""

    def calculate(self, z: ComplexInput) -> ComplexInput:
        return z

    def __eq__(self, other):
        return isinstance(other, Identity)

    def __hash__(self):
        return hash(Identity)

    def __repr__(self):
        return "Identity()"
