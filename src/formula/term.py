"""
A single complex wave term and the three ways to evaluate it.

Terms are evaluated on Python complex numbers or on numpy arrays of them, so a
whole pixel grid can be pushed through a formula in one call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from .coefficient import Relationship, parse_relationship
from .errors import DeserializationError

ComplexInput = Union[complex, np.ndarray]


def complex_from_marshal(options: Optional[Dict[str, Any]], default: complex = complex(1, 0)) -> complex:
    """Read a ``{real: .., imaginary: ..}`` mapping, falling back to ``default``."""
    if options is None:
        return default
    if not isinstance(options, dict):
        raise DeserializationError(f"complex number must be a mapping with real/imaginary keys, got {options!r}")
    try:
        return complex(float(options.get('real', 0)), float(options.get('imaginary', 0)))
    except (TypeError, ValueError) as err:
        raise DeserializationError(f"invalid complex number {options!r}: {err}") from err


def _polar_power(z: ComplexInput, power: int) -> ComplexInput:
    # |z|^p * e^(i p arg z); 0^0 is 1 and 0^-k is inf
    magnitude = np.abs(z) ** float(power)
    return magnitude * np.exp(1j * power * np.angle(z))


def calculate_exponent_term(z: ComplexInput, power_n: int, power_m: int,
                            scale: complex, ignore_complex_conjugate: bool) -> ComplexInput:
    """
    Rosette form: scale * z^N * conj(z)^M.

    The conjugate factor is dropped when ``ignore_complex_conjugate`` is set.
    Zero raised to a negative power produces a non-finite value rather than
    an exception.
    """
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        result = _polar_power(z, power_n)
        if not ignore_complex_conjugate:
            result = result * _polar_power(np.conj(z), power_m)
        return result * scale


def calculate_euler_term(z: ComplexInput, power_n: int, power_m: int,
                         scale: complex, ignore_complex_conjugate: bool) -> ComplexInput:
    """Frieze form: scale * e^(i N z) * e^(-i M conj(z))."""
    with np.errstate(over='ignore', invalid='ignore'):
        result = np.exp(1j * power_n * z)
        if not ignore_complex_conjugate:
            result = result * np.exp(-1j * power_m * np.conj(z))
        return result * scale


@dataclass(frozen=True)
class Term:
    """
    One wave term: multiplier * f(N, M).

    ``coefficient_relationships`` lists companion terms (see coefficient.py)
    that rosette and frieze formulas evaluate alongside this one. Locked
    wallpaper terms use it to record which relationship produced them.
    """
    multiplier: complex = complex(1, 0)
    power_n: int = 0
    power_m: int = 0
    ignore_complex_conjugate: bool = False
    coefficient_relationships: Tuple[Relationship, ...] = field(default_factory=tuple)

    def power_sum_is_even(self) -> bool:
        return (self.power_n + self.power_m) % 2 == 0

    def power_n_is_even(self) -> bool:
        return self.power_n % 2 == 0

    def calculate_in_lattice_coordinates(self, z: ComplexInput) -> ComplexInput:
        """
        Wallpaper form: e^(2 pi i (N x + M y)).

        Args:
            z: Point(s) already converted to lattice coordinates (x + iy)
        """
        return np.exp(2j * np.pi * (self.power_n * np.real(z) + self.power_m * np.imag(z)))

    def calculate_exponential(self, z: ComplexInput) -> ComplexInput:
        return calculate_exponent_term(z, self.power_n, self.power_m,
                                       self.multiplier, self.ignore_complex_conjugate)

    def calculate_euler(self, z: ComplexInput) -> ComplexInput:
        return calculate_euler_term(z, self.power_n, self.power_m,
                                    self.multiplier, self.ignore_complex_conjugate)


class TermBuilder:
    """Fluent builder for Term. The multiplier defaults to 1."""

    def __init__(self):
        self._multiplier = complex(1, 0)
        self._power_n = 0
        self._power_m = 0
        self._ignore_complex_conjugate = False
        self._relationships: List[Relationship] = []

    def multiplier(self, multiplier: complex) -> 'TermBuilder':
        self._multiplier = complex(multiplier)
        return self

    def power_n(self, power: int) -> 'TermBuilder':
        self._power_n = int(power)
        return self

    def power_m(self, power: int) -> 'TermBuilder':
        self._power_m = int(power)
        return self

    def ignore_complex_conjugate(self) -> 'TermBuilder':
        self._ignore_complex_conjugate = True
        return self

    def add_coefficient_relationship(self, relationship: Relationship) -> 'TermBuilder':
        self._relationships.append(relationship)
        return self

    def with_marshal_options(self, options: Dict[str, Any]) -> 'TermBuilder':
        """
        Load settings from a deserialized YAML/JSON mapping.

        Recognized keys: multiplier, power_n, power_m, ignore_complex_conjugate,
        coefficient_relationships. Missing keys leave the current value.
        """
        if not isinstance(options, dict):
            raise DeserializationError(f"term must be a mapping, got {options!r}")
        try:
            if 'multiplier' in options:
                self.multiplier(complex_from_marshal(options['multiplier']))
            if 'power_n' in options:
                self.power_n(_strict_int(options['power_n'], 'power_n'))
            if 'power_m' in options:
                self.power_m(_strict_int(options['power_m'], 'power_m'))
            if options.get('ignore_complex_conjugate'):
                self.ignore_complex_conjugate()
            for code in options.get('coefficient_relationships') or []:
                self.add_coefficient_relationship(parse_relationship(code))
        except DeserializationError:
            raise
        except ValueError as err:
            raise DeserializationError(f"invalid term: {err}") from err
        return self

    def build(self) -> Term:
        return Term(
            multiplier=self._multiplier,
            power_n=self._power_n,
            power_m=self._power_m,
            ignore_complex_conjugate=self._ignore_complex_conjugate,
            coefficient_relationships=tuple(self._relationships),
        )


def _strict_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise DeserializationError(f"{name} must be an integer, got {value!r}")
    return int(value)
