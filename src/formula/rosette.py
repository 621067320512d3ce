"""
Rosette and Frieze formulas.

Both are sums of terms, where every term is evaluated once for itself and
once for each of its coefficient relationships:

    Rosette: a * z^n * conj(z)^m                 (rotations around the origin)
    Frieze:  a * e^(i n z) * e^(-i m conj(z))    (periodic along the real axis)

Rosettes repeat around the origin with a fold equal to the gcd of |n - m|
across their terms. Friezes are classified into the seven frieze groups by
looking at which relationships every term carries.
"""

import math
from functools import reduce
from typing import Callable, List, Sequence

from .arbitrary import Arbitrary
from .coefficient import Pairing, Relationship
from .symmetry import FRIEZE_SYMMETRIES, Symmetry
from .term import ComplexInput, Term, calculate_euler_term, calculate_exponent_term

_TermForm = Callable[[ComplexInput, int, int, complex, bool], ComplexInput]


def _sum_term_with_relationships(term: Term, z: ComplexInput, form: _TermForm) -> ComplexInput:
    relationships = [Relationship.PLUS_N_PLUS_M] + list(term.coefficient_relationships)
    pairings = Pairing(term.power_n, term.power_m).generate_coefficient_sets(relationships)

    total = 0
    for pairing in pairings:
        multiplier = -term.multiplier if pairing.negate_multiplier else term.multiplier
        total = total + form(z, pairing.power_n, pairing.power_m, multiplier, term.ignore_complex_conjugate)
    return total


class _TermSumFormula(Arbitrary):
    _form: _TermForm

    def __init__(self, terms: Sequence[Term], multiplier: complex = complex(1, 0)):
        self.terms = tuple(terms)
        self.multiplier = complex(multiplier)

    def calculate(self, z: ComplexInput) -> ComplexInput:
        total = 0
        for term in self.terms:
            total = total + _sum_term_with_relationships(term, z, type(self)._form)
        return total * self.multiplier

    def formula_level_terms(self) -> List[Term]:
        return list(self.terms)

    def __eq__(self, other):
        return type(self) is type(other) and self.terms == other.terms and self.multiplier == other.multiplier

    def __repr__(self):
        return f"{type(self).__name__}(terms={self.terms!r}, multiplier={self.multiplier!r})"


class Rosette(_TermSumFormula):
    """Sum of z^n * conj(z)^m terms."""
    _form = staticmethod(calculate_exponent_term)

    def multifold_symmetry(self) -> int:
        """
        Rotational fold of the pattern: gcd of |n - m| over every term.

        A single term gives its own |n - m|; no terms gives 1.
        """
        differences = [abs(term.power_n - term.power_m) for term in self.terms]
        if not differences:
            return 1
        return reduce(math.gcd, differences)


class Frieze(_TermSumFormula):
    """Sum of e^(i n z) * e^(-i m conj(z)) terms."""
    _form = staticmethod(calculate_euler_term)

    def symmetries_found(self) -> List[Symmetry]:
        """
        Frieze groups that every term supports.

        Starts with all seven groups and strikes out the ones any term lacks
        the relationships for. A term that ignores the complex conjugate
        leaves only p111.
        """
        found = {symmetry: True for symmetry in FRIEZE_SYMMETRIES}

        for term in self.terms:
            if term.ignore_complex_conjugate:
                for symmetry in found:
                    found[symmetry] = symmetry == Symmetry.P111
                continue

            relationships = set(term.coefficient_relationships)
            even = term.power_sum_is_even()
            plus_m_plus_n = Relationship.PLUS_M_PLUS_N in relationships
            minus_m_minus_n = Relationship.MINUS_M_MINUS_N in relationships
            minus_n_minus_m = Relationship.MINUS_N_MINUS_M in relationships
            plus_flip = Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE in relationships
            minus_flip = Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE in relationships

            if not minus_n_minus_m:
                found[Symmetry.P211] = False
            if not plus_m_plus_n:
                found[Symmetry.P1M1] = False
            if not (minus_flip and not even):
                found[Symmetry.P11G] = False
            if not (minus_m_minus_n or (minus_flip and even)):
                found[Symmetry.P11M] = False
            if not (minus_n_minus_m
                    and (plus_m_plus_n or (plus_flip and even))
                    and (minus_m_minus_n or (minus_flip and even))):
                found[Symmetry.P2MM] = False
            if not (minus_n_minus_m and plus_flip and not even and minus_flip):
                found[Symmetry.P2MG] = False

        return [symmetry for symmetry in FRIEZE_SYMMETRIES if found[symmetry]]
