"""
Fluent builder for every formula variant.

    formula, error = (Builder()
                      .hexagonal()
                      .add_wave_packet(packet)
                      .desired_symmetry("p31m")
                      .build())

``build`` never raises for invalid parameters: it returns the Identity formula
together with the error so callers always have something to render with.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from .arbitrary import Arbitrary, Identity
from .errors import DeserializationError, FormulaError, UnsupportedSymmetryError
from .rosette import Frieze, Rosette
from .symmetry import Symmetry, parse_symmetry
from .term import Term, TermBuilder, complex_from_marshal
from .wallpaper import Generic, Hexagonal, Rectangular, Rhombic, Square
from .wave_packet import WavePacket, WavePacketBuilder

logger = logging.getLogger(__name__)

FORMULA_TYPES = [
    "identity",
    "rosette",
    "frieze",
    "square",
    "rectangular",
    "rhombic",
    "hexagonal",
    "generic",
]


class Builder:
    """Collects formula parameters, then creates the formula in ``build``."""

    def __init__(self):
        self._formula_type = "identity"
        self._formula_level_terms: List[Term] = []
        self._wave_packets: List[WavePacket] = []
        self._lattice_width = 0.0
        self._lattice_height = 0.0
        self._desired_symmetry: Union[Symmetry, str, None] = None
        self._multiplier = complex(1, 0)

    def _set_type(self, formula_type: str) -> 'Builder':
        self._formula_type = formula_type
        return self

    def rosette(self) -> 'Builder':
        return self._set_type("rosette")

    def frieze(self) -> 'Builder':
        return self._set_type("frieze")

    def square(self) -> 'Builder':
        return self._set_type("square")

    def rectangular(self) -> 'Builder':
        return self._set_type("rectangular")

    def rhombic(self) -> 'Builder':
        return self._set_type("rhombic")

    def hexagonal(self) -> 'Builder':
        return self._set_type("hexagonal")

    def generic(self) -> 'Builder':
        return self._set_type("generic")

    def add_term(self, term: Term) -> 'Builder':
        """Add a formula level term (rosette and frieze)."""
        self._formula_level_terms.append(term)
        return self

    def add_wave_packet(self, packet: WavePacket) -> 'Builder':
        """Add a wave packet (wallpaper formulas)."""
        self._wave_packets.append(packet)
        return self

    def lattice_width(self, width: float) -> 'Builder':
        self._lattice_width = float(width)
        return self

    def lattice_height(self, height: float) -> 'Builder':
        self._lattice_height = float(height)
        return self

    def desired_symmetry(self, symmetry: Union[Symmetry, str, None]) -> 'Builder':
        """Request a symmetry, as a Symmetry or its case-sensitive tag."""
        self._desired_symmetry = symmetry
        return self

    def multiplier(self, multiplier: complex) -> 'Builder':
        """Scale applied to the whole formula. Defaults to 1."""
        self._multiplier = complex(multiplier)
        return self

    def with_marshal_options(self, options: Dict[str, Any]) -> 'Builder':
        """
        Load settings from a deserialized YAML/JSON mapping.

        Keys: type, multiplier, lattice_width, lattice_height, desired_symmetry,
        terms, wave_packets. Unknown formula types raise DeserializationError.
        """
        if not isinstance(options, dict):
            raise DeserializationError(f"formula must be a mapping, got {options!r}")

        formula_type = options.get('type', 'identity')
        if formula_type not in FORMULA_TYPES:
            raise DeserializationError(
                f"unknown formula type {formula_type!r}, expected one of: {', '.join(FORMULA_TYPES)}")
        self._set_type(formula_type)

        try:
            if 'multiplier' in options:
                self.multiplier(complex_from_marshal(options['multiplier']))
            if options.get('lattice_width') is not None:
                self.lattice_width(float(options['lattice_width']))
            if options.get('lattice_height') is not None:
                self.lattice_height(float(options['lattice_height']))
        except DeserializationError:
            raise
        except (TypeError, ValueError) as err:
            raise DeserializationError(f"invalid formula dimensions: {err}") from err

        if options.get('desired_symmetry'):
            self.desired_symmetry(str(options['desired_symmetry']))

        terms = options.get('terms') or []
        packets = options.get('wave_packets') or []
        if not isinstance(terms, list) or not isinstance(packets, list):
            raise DeserializationError("formula terms and wave_packets must be lists")
        for term_options in terms:
            self.add_term(TermBuilder().with_marshal_options(term_options).build())
        for packet_options in packets:
            self.add_wave_packet(WavePacketBuilder().with_marshal_options(packet_options).build())
        return self

    def _create(self) -> Arbitrary:
        desired_symmetry = parse_symmetry(self._desired_symmetry)

        if self._formula_type in ("rosette", "frieze"):
            if desired_symmetry is not None:
                raise UnsupportedSymmetryError(
                    f"{self._formula_type} formulas cannot apply a desired symmetry")
            formula_class = Rosette if self._formula_type == "rosette" else Frieze
            return formula_class(self._formula_level_terms, self._multiplier)

        if self._formula_type == "square":
            return Square.create(self._wave_packets, desired_symmetry, self._multiplier)
        if self._formula_type == "rectangular":
            return Rectangular.create(self._wave_packets, self._lattice_height,
                                      desired_symmetry, self._multiplier)
        if self._formula_type == "rhombic":
            return Rhombic.create(self._wave_packets, self._lattice_height,
                                  desired_symmetry, self._multiplier)
        if self._formula_type == "hexagonal":
            return Hexagonal.create(self._wave_packets, desired_symmetry, self._multiplier)
        if self._formula_type == "generic":
            return Generic.create(self._wave_packets, self._lattice_width, self._lattice_height,
                                  desired_symmetry, self._multiplier)
        return Identity()

    def build(self) -> Tuple[Arbitrary, Optional[FormulaError]]:
        """
        Create the formula.

        Returns:
            (formula, None) on success, (Identity(), error) when the
            parameters are invalid
        """
        try:
            formula = self._create()
        except FormulaError as err:
            logger.warning("could not build %s formula, using identity: %s", self._formula_type, err)
            return Identity(), err
        return formula, None
