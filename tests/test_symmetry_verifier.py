#!/usr/bin/env python3
"""
Numerical checks that built formulas really have the symmetries they claim.

For each formula an isometry T is applied to random points and f(T(z)) is
compared with f(z).
"""

import math

import pytest
from pathlib import Path
import sys

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.analysis.symmetry_verifier import FormulaSymmetryVerifier
from src.formula.arbitrary import Identity
from src.formula.coefficient import Relationship
from src.formula.rosette import Frieze, Rosette
from src.formula.symmetry import Symmetry
from src.formula.term import Term
from src.formula.wallpaper import Hexagonal, Rectangular, Rhombic, Square
from src.formula.wave_packet import WavePacket


def packet(power_n, power_m, multiplier=complex(1, 0)):
    return WavePacket(terms=(Term(power_n=power_n, power_m=power_m),), multiplier=multiplier)


@pytest.fixture
def verifier():
    return FormulaSymmetryVerifier(tolerance=1e-6, num_samples=128, seed=42)


class TestRotation:

    def test_square_four_fold(self, verifier):
        formula = Square.create([packet(1, -2), packet(3, 1, complex(0.5, 0.2))])
        assert verifier.check_rotation(formula, 4).present

    def test_hexagonal_three_fold_only(self, verifier):
        formula = Hexagonal.create([packet(1, -2)])
        assert verifier.check_rotation(formula, 3).present
        assert not verifier.check_rotation(formula, 6).present

    def test_hexagonal_p6(self, verifier):
        formula = Hexagonal.create([packet(1, -2)], Symmetry.P6)
        assert verifier.check_rotation(formula, 6).present

    def test_rosette_multifold(self, verifier):
        formula = Rosette([Term(power_n=5, power_m=0, coefficient_relationships=(Relationship.PLUS_M_PLUS_N,))])
        assert formula.multifold_symmetry() == 5
        assert verifier.check_rotation(formula, 5).present
        assert not verifier.check_rotation(formula, 10).present


class TestReflection:

    def test_rectangular_pm(self, verifier):
        formula = Rectangular.create([packet(1, 2)], lattice_height=0.5, desired_symmetry=Symmetry.PM)
        assert verifier.check_reflection(formula, 0).present

    def test_rectangular_without_mirror(self, verifier):
        formula = Rectangular.create([packet(1, 2)], lattice_height=0.5)
        assert not verifier.check_reflection(formula, 0).present

    def test_rectangular_pg_glide(self, verifier):
        formula = Rectangular.create([packet(1, 2)], lattice_height=0.5, desired_symmetry=Symmetry.PG)
        assert verifier.check_glide(formula, 0, 0.5).present
        assert not verifier.check_reflection(formula, 0).present

    def test_square_p4m_diagonal_mirror(self, verifier):
        formula = Square.create([packet(1, -2)], Symmetry.P4M)
        assert verifier.check_reflection(formula, math.pi / 4).present

    def test_rhombic_mirror(self, verifier):
        formula = Rhombic.create([packet(1, -2)], lattice_height=0.75)
        assert verifier.check_reflection(formula, 0).present


class TestVerify:

    @pytest.mark.parametrize("formula", [
        Square.create([packet(1, -2)], Symmetry.P4G),
        Hexagonal.create([packet(2, 1)], Symmetry.P31M),
        Rectangular.create([packet(1, 2)], lattice_height=0.5, desired_symmetry=Symmetry.PMM),
        Frieze([Term(power_n=1, power_m=-1, coefficient_relationships=(Relationship.MINUS_N_MINUS_M,))]),
        Rosette([Term(power_n=6, power_m=1), Term(power_n=11, power_m=1)]),
    ])
    def test_claims_hold(self, verifier, formula):
        result = verifier.verify(formula)
        assert result.verified, result.message

    def test_wallpaper_checks_both_periods(self, verifier):
        result = verifier.verify(Square.create([packet(1, -2)]))
        assert 'translation_v1' in result.checks
        assert 'translation_v2' in result.checks
        assert result.checks['rotation'].name == "4-fold rotation"

    def test_frieze_period(self, verifier):
        formula = Frieze([Term(power_n=2, power_m=1)])
        assert verifier.verify(formula).checks['translation_period'].present

    def test_identity_has_nothing_to_check(self, verifier):
        result = verifier.verify(Identity())
        assert result.verified
        assert result.checks == {}
        assert result.formula_name == "Identity"

    def test_reports_missing_symmetry(self, verifier):
        result = verifier.check_translation(Rosette([Term(power_n=1)]), 1.0)
        assert not result.present
        assert result.max_deviation > 0.5
