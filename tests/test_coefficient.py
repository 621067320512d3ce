#!/usr/bin/env python3
"""
Tests for the coefficient relationship algebra.

Every relationship rewrites a power pair (N, M) into exactly one companion
pair, and the multiplier flip depends on the parity of N or of N+M.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.formula.coefficient import Pairing, Relationship, parse_relationship


class TestGenerateCoefficientSets:
    """One pairing per relationship, in input order."""

    def test_plus_m_plus_n_swaps_powers(self):
        pairings = Pairing(1, 2).generate_coefficient_sets([Relationship.PLUS_M_PLUS_N])
        assert pairings == [Pairing(2, 1, False)]

    def test_flip_scale_negates_on_odd_sum(self):
        pairings = Pairing(1, 2).generate_coefficient_sets([Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE])
        assert pairings[0].power_n == 2
        assert pairings[0].power_m == 1
        assert pairings[0].negate_multiplier is True

    def test_flip_scale_keeps_sign_on_even_sum(self):
        pairings = Pairing(2, 4).generate_coefficient_sets([Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE])
        assert pairings == [Pairing(-4, -2, False)]

    def test_output_order_matches_input_order(self):
        pairings = Pairing(3, -1).generate_coefficient_sets([
            Relationship.MINUS_N_MINUS_M,
            Relationship.PLUS_M_PLUS_N,
        ])
        assert pairings == [Pairing(-3, 1), Pairing(-1, 3)]

    def test_hexagonal_companions(self):
        pairings = Pairing(1, -2).generate_coefficient_sets([
            Relationship.PLUS_M_MINUS_SUM_N_AND_M,
            Relationship.MINUS_SUM_N_AND_M_PLUS_N,
        ])
        assert pairings == [Pairing(-2, 1), Pairing(1, 1)]

    def test_square_companions(self):
        pairings = Pairing(1, -2).generate_coefficient_sets([
            Relationship.PLUS_M_MINUS_N,
            Relationship.MINUS_N_MINUS_M,
            Relationship.MINUS_M_PLUS_N,
        ])
        assert pairings == [Pairing(-2, -1), Pairing(-1, 2), Pairing(2, 1)]

    @pytest.mark.parametrize("relationship,power_n,power_m,negate", [
        (Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N, 3, -2, True),
        (Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N, -3, 2, True),
        (Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM, 3, -2, True),
        (Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM, -3, 2, True),
        (Relationship.PLUS_N_MINUS_M, 3, -2, False),
        (Relationship.MINUS_N_PLUS_M, -3, 2, False),
        (Relationship.PLUS_N_PLUS_M, 3, 2, False),
    ])
    def test_parity_relationships(self, relationship, power_n, power_m, negate):
        """Base pair (3, 2): N is odd and N+M is odd."""
        pairing = Pairing(3, 2).generate_coefficient_sets([relationship])[0]
        assert (pairing.power_n, pairing.power_m, pairing.negate_multiplier) == (power_n, power_m, negate)

    def test_power_n_parity_ignores_m(self):
        pairing = Pairing(2, 3).generate_coefficient_sets(
            [Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N])[0]
        assert pairing.negate_multiplier is False

    def test_negative_odd_power_counts_as_odd(self):
        pairing = Pairing(-1, 0).generate_coefficient_sets(
            [Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N])[0]
        assert pairing == Pairing(1, 0, True)

    def test_no_relationships(self):
        assert Pairing(1, 2).generate_coefficient_sets([]) == []


class TestParseRelationship:

    def test_known_codes(self):
        assert parse_relationship("+M+N") is Relationship.PLUS_M_PLUS_N
        assert parse_relationship("-(N+M)+N") is Relationship.MINUS_SUM_N_AND_M_PLUS_N
        assert parse_relationship("+N-MF(N+M)") is Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM

    def test_every_code_round_trips(self):
        for relationship in Relationship:
            assert parse_relationship(relationship.value) is relationship

    def test_unknown_code(self):
        with pytest.raises(ValueError, match="unknown coefficient relationship"):
            parse_relationship("+X+Y")
