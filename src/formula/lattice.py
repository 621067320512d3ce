"""
Lattices for wallpaper formulas.

A lattice is a pair of basis vectors (stored as complex numbers). Wallpaper
formulas convert every point into lattice coordinates, i.e. the (a, b) that
solve point = a * v1 + b * v2, and evaluate their wave packets there, so any
integer step along v1 or v2 leaves the result unchanged.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .coefficient import Pairing, Relationship
from .errors import DegenerateLatticeError
from .term import ComplexInput, Term
from .wave_packet import WavePacket

logger = logging.getLogger(__name__)

# Below this real part the first vector is treated as vertical.
SWAP_TOLERANCE = 1e-6
COLLINEAR_TOLERANCE = 1e-8


def convert_to_lattice_coordinates(point: ComplexInput, lattice_vectors: Sequence[complex]) -> ComplexInput:
    """
    Express ``point`` in terms of the two lattice vectors.

    Uses Cramer's rule on the real and imaginary parts. When the first
    vector has no usable real part the vectors are swapped for the solve and
    the result is swapped back.

    Args:
        point: Cartesian point(s), complex scalar or numpy array
        lattice_vectors: [v1, v2]

    Returns:
        a + bi where point = a * v1 + b * v2
    """
    vector1 = complex(lattice_vectors[0])
    vector2 = complex(lattice_vectors[1])
    swap = vector1.real < SWAP_TOLERANCE
    if swap:
        vector1, vector2 = vector2, vector1

    x = np.real(point)
    y = np.imag(point)

    scalar_for_vector2 = (vector1.real * y - vector1.imag * x) / \
                         (vector1.real * vector2.imag - vector1.imag * vector2.real)
    scalar_for_vector1 = (x - scalar_for_vector2 * vector2.real) / vector1.real

    if swap:
        return scalar_for_vector2 + 1j * scalar_for_vector1
    return scalar_for_vector1 + 1j * scalar_for_vector2


def vector_is_zero(vector: complex) -> bool:
    return vector.real == 0 and vector.imag == 0


def vectors_are_collinear(vector1: complex, vector2: complex) -> bool:
    dot = abs(vector1.real * vector2.real + vector1.imag * vector2.imag)
    return abs(dot - abs(vector1) * abs(vector2)) < COLLINEAR_TOLERANCE


def validate_lattice_vectors(lattice_vectors: Sequence[complex]) -> None:
    """
    Raises:
        DegenerateLatticeError: if a vector is (0,0) or the vectors are collinear
    """
    vector1 = complex(lattice_vectors[0])
    vector2 = complex(lattice_vectors[1])
    if vector_is_zero(vector1) or vector_is_zero(vector2):
        raise DegenerateLatticeError("lattice vectors cannot be (0,0)")
    if vectors_are_collinear(vector1, vector2):
        raise DegenerateLatticeError(
            f"vectors cannot be collinear: ({vector1.real:f},{vector1.imag:f}) "
            f"and ({vector2.real:f},{vector2.imag:f})"
        )


@dataclass(frozen=True)
class Lattice:
    """Two basis vectors."""
    vector1: complex
    vector2: complex

    @property
    def vectors(self) -> List[complex]:
        return [self.vector1, self.vector2]

    def validate(self) -> None:
        validate_lattice_vectors(self.vectors)

    def convert_to_lattice_coordinates(self, point: ComplexInput) -> ComplexInput:
        return convert_to_lattice_coordinates(point, self.vectors)


def lock_terms_based_on_relationship(locked_relationships: Sequence[Relationship],
                                     wave_packets: Sequence[WavePacket]) -> List[WavePacket]:
    """
    Rebuild each packet from its first term plus the locked companions.

    Every companion has multiplier 1 (negated if the relationship asks for
    it) and records the relationship that produced it. Terms after the first
    are not carried over.
    """
    locked_packets = []
    for packet in wave_packets:
        base_term = packet.terms[0]
        base_pairing = Pairing(base_term.power_n, base_term.power_m)

        terms = [base_term]
        pairings = base_pairing.generate_coefficient_sets(locked_relationships)
        for relationship, pairing in zip(locked_relationships, pairings):
            terms.append(Term(
                multiplier=complex(-1, 0) if pairing.negate_multiplier else complex(1, 0),
                power_n=pairing.power_n,
                power_m=pairing.power_m,
                coefficient_relationships=(relationship,),
            ))

        if len(packet.terms) > 1 and locked_relationships:
            logger.debug("locking packet drops %d trailing terms", len(packet.terms) - 1)
        locked_packets.append(WavePacket(terms=tuple(terms), multiplier=packet.multiplier))

    return locked_packets


def calculate_coordinate_using_wave_packets(coordinate: ComplexInput, lattice_vectors: Sequence[complex],
                                            wave_packets: Sequence[WavePacket]) -> ComplexInput:
    """Sum of each packet's value at the lattice coordinate, averaged over its terms."""
    z_in_lattice = convert_to_lattice_coordinates(coordinate, lattice_vectors)
    result = 0
    for packet in wave_packets:
        result = result + packet.calculate(z_in_lattice) / len(packet.terms)
    return result
