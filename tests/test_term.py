#!/usr/bin/env python3
"""
Tests for terms, wave packets and their builders.
"""

import cmath
import math

import numpy as np
import pytest
from pathlib import Path
import sys

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.formula.coefficient import Relationship
from src.formula.errors import DeserializationError, EmptyWavePacketError
from src.formula.term import (
    Term,
    TermBuilder,
    calculate_euler_term,
    calculate_exponent_term,
    complex_from_marshal,
)
from src.formula.wave_packet import WavePacket, WavePacketBuilder

TOLERANCE = 1e-9


class TestTermForms:
    """The three evaluation forms."""

    def test_lattice_form(self):
        term = Term(power_n=1, power_m=-2)
        assert abs(term.calculate_in_lattice_coordinates(0.25 + 0j) - 1j) < TOLERANCE

    def test_lattice_form_ignores_multiplier(self):
        term = Term(multiplier=complex(5, 0), power_n=1, power_m=0)
        assert abs(term.calculate_in_lattice_coordinates(0.5 + 0j) - (-1)) < TOLERANCE

    def test_exponent_term(self):
        assert abs(calculate_exponent_term(2 + 1j, 1, 0, 1, False) - (2 + 1j)) < TOLERANCE

    def test_exponent_term_with_conjugate(self):
        # z * conj(z) = |z|^2
        assert abs(calculate_exponent_term(1 + 1j, 1, 1, 1, False) - 2) < TOLERANCE

    def test_exponent_term_ignores_conjugate(self):
        assert abs(calculate_exponent_term(2j, 1, 5, 3, True) - 6j) < TOLERANCE

    def test_zero_to_the_zero_is_one(self):
        assert abs(calculate_exponent_term(0j, 0, 0, 1, False) - 1) < TOLERANCE

    def test_zero_to_positive_power_is_zero(self):
        assert abs(calculate_exponent_term(0j, 2, 1, 1, False)) < TOLERANCE

    def test_zero_to_negative_power_is_not_finite(self):
        result = calculate_exponent_term(0j, -1, 0, 1, False)
        assert not np.isfinite(result)

    def test_euler_term_at_origin(self):
        assert abs(calculate_euler_term(0j, 1, 1, 2, False) - 2) < TOLERANCE

    def test_euler_term(self):
        z = math.pi / 2 + 0j
        expected = cmath.exp(1j * z) * cmath.exp(-1j * 3 * z.conjugate())
        assert abs(calculate_euler_term(z, 1, 3, 1, False) - expected) < TOLERANCE

    def test_array_input(self):
        z = np.array([[1 + 1j, 2 + 0j], [0 + 1j, -1 + 0j]])
        result = calculate_exponent_term(z, 2, 0, 1, True)
        assert result.shape == (2, 2)
        assert np.allclose(result, z ** 2)

    def test_parity_helpers(self):
        assert Term(power_n=1, power_m=1).power_sum_is_even()
        assert not Term(power_n=1, power_m=2).power_sum_is_even()
        assert Term(power_n=-2).power_n_is_even()
        assert not Term(power_n=-3).power_n_is_even()


class TestTermBuilder:

    def test_defaults(self):
        term = TermBuilder().build()
        assert term.multiplier == complex(1, 0)
        assert term.power_n == 0
        assert term.power_m == 0
        assert term.ignore_complex_conjugate is False
        assert term.coefficient_relationships == ()

    def test_fluent_settings(self):
        term = (TermBuilder()
                .multiplier(complex(2, -1))
                .power_n(3)
                .power_m(-4)
                .ignore_complex_conjugate()
                .add_coefficient_relationship(Relationship.PLUS_M_PLUS_N)
                .add_coefficient_relationship(Relationship.MINUS_N_MINUS_M)
                .build())
        assert term == Term(complex(2, -1), 3, -4, True,
                            (Relationship.PLUS_M_PLUS_N, Relationship.MINUS_N_MINUS_M))

    def test_marshal_options(self):
        term = TermBuilder().with_marshal_options({
            'multiplier': {'real': -1.0, 'imaginary': 2e-2},
            'power_n': 3,
            'power_m': 0,
            'ignore_complex_conjugate': True,
            'coefficient_relationships': ['-M-N', '+M+NF'],
        }).build()
        assert term.multiplier == complex(-1.0, 0.02)
        assert term.power_n == 3
        assert term.ignore_complex_conjugate is True
        assert term.coefficient_relationships == (
            Relationship.MINUS_M_MINUS_N,
            Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE,
        )

    def test_marshal_without_multiplier_defaults_to_one(self):
        term = TermBuilder().with_marshal_options({'power_n': 1}).build()
        assert term.multiplier == complex(1, 0)

    def test_marshal_rejects_unknown_relationship(self):
        with pytest.raises(DeserializationError):
            TermBuilder().with_marshal_options({'coefficient_relationships': ['bogus']})

    def test_marshal_rejects_fractional_power(self):
        with pytest.raises(DeserializationError, match="power_n"):
            TermBuilder().with_marshal_options({'power_n': 1.5})

    def test_complex_from_marshal(self):
        assert complex_from_marshal({'real': 1, 'imaginary': -2}) == complex(1, -2)
        assert complex_from_marshal(None) == complex(1, 0)
        with pytest.raises(DeserializationError):
            complex_from_marshal([1, 2])


class TestWavePacket:

    def test_calculate_sums_terms_and_scales(self):
        packet = WavePacket(terms=(Term(power_n=1), Term(power_m=1)), multiplier=2)
        # e^(i pi/2) + e^(i pi) = i - 1
        result = packet.calculate(0.25 + 0.5j)
        assert abs(result - (-2 + 2j)) < TOLERANCE

    def test_builder(self):
        packet = (WavePacketBuilder()
                  .multiplier(complex(0, 1))
                  .add_term(Term(power_n=1, power_m=-2))
                  .build())
        assert packet.multiplier == complex(0, 1)
        assert packet.terms == (Term(power_n=1, power_m=-2),)

    def test_builder_multiplier_defaults_to_one(self):
        packet = WavePacketBuilder().add_term(Term()).build()
        assert packet.multiplier == complex(1, 0)

    def test_builder_requires_terms(self):
        with pytest.raises(EmptyWavePacketError):
            WavePacketBuilder().build()

    def test_marshal_options(self):
        packet = WavePacketBuilder().with_marshal_options({
            'multiplier': {'real': -2, 'imaginary': 0.5},
            'terms': [{'power_n': 1, 'power_m': -2}, {'power_n': 0, 'power_m': 3}],
        }).build()
        assert packet.multiplier == complex(-2, 0.5)
        assert [(t.power_n, t.power_m) for t in packet.terms] == [(1, -2), (0, 3)]
