"""
Wave packets: groups of terms that share one multiplier.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .errors import DeserializationError, EmptyWavePacketError
from .term import ComplexInput, Term, TermBuilder, complex_from_marshal


@dataclass(frozen=True)
class WavePacket:
    """Terms evaluated in lattice coordinates, summed and scaled by ``multiplier``."""
    terms: Tuple[Term, ...]
    multiplier: complex = complex(1, 0)

    def calculate(self, z_in_lattice_coordinates: ComplexInput) -> ComplexInput:
        total = 0
        for term in self.terms:
            total = total + term.calculate_in_lattice_coordinates(z_in_lattice_coordinates)
        return total * self.multiplier


class WavePacketBuilder:
    """Fluent builder for WavePacket. The multiplier defaults to 1."""

    def __init__(self):
        self._multiplier = complex(1, 0)
        self._terms: List[Term] = []

    def multiplier(self, multiplier: complex) -> 'WavePacketBuilder':
        self._multiplier = complex(multiplier)
        return self

    def add_term(self, term: Term) -> 'WavePacketBuilder':
        self._terms.append(term)
        return self

    def with_marshal_options(self, options: Dict[str, Any]) -> 'WavePacketBuilder':
        """Load ``multiplier`` and ``terms`` from a deserialized mapping."""
        if not isinstance(options, dict):
            raise DeserializationError(f"wave packet must be a mapping, got {options!r}")
        if 'multiplier' in options:
            self.multiplier(complex_from_marshal(options['multiplier']))
        terms = options.get('terms') or []
        if not isinstance(terms, list):
            raise DeserializationError("wave packet terms must be a list")
        for term_options in terms:
            self.add_term(TermBuilder().with_marshal_options(term_options).build())
        return self

    def build(self) -> WavePacket:
        if not self._terms:
            raise EmptyWavePacketError("wave packet must have at least one term")
        return WavePacket(terms=tuple(self._terms), multiplier=self._multiplier)
