"""
Coefficient relationships between the powers of a term.

A relationship rewrites the power pair (N, M) of a term into a companion pair,
optionally asking for the multiplier to be negated. Formulas use these
companions to force symmetry: a rosette term with "+M+N" also evaluates the
term with its powers swapped, a hexagonal lattice locks every packet with the
two 120 degree companions, and so on.

The codes are the values used in configuration files:

    +N+M          (N, M)
    +M+N          (M, N)
    +M+NF         (M, N)        negated when N+M is odd
    -N-M          (-N, -M)
    -M-N          (-M, -N)
    -M-NF         (-M, -N)      negated when N+M is odd
    +M-(N+M)      (M, -(N+M))
    -(N+M)+N      (-(N+M), N)
    +N-M          (N, -M)
    +N-MF(N)      (N, -M)       negated when N is odd
    +N-MF(N+M)    (N, -M)       negated when N+M is odd
    -N+M          (-N, M)
    -N+MF(N)      (-N, M)       negated when N is odd
    -N+MF(N+M)    (-N, M)       negated when N+M is odd
    +M-N          (M, -N)
    -M+N          (-M, N)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple


class Relationship(Enum):
    PLUS_N_PLUS_M = "+N+M"
    PLUS_M_PLUS_N = "+M+N"
    MINUS_N_MINUS_M = "-N-M"
    MINUS_M_MINUS_N = "-M-N"
    PLUS_M_PLUS_N_MAYBE_FLIP_SCALE = "+M+NF"
    MINUS_M_MINUS_N_MAYBE_FLIP_SCALE = "-M-NF"
    PLUS_M_MINUS_SUM_N_AND_M = "+M-(N+M)"
    MINUS_SUM_N_AND_M_PLUS_N = "-(N+M)+N"
    PLUS_M_MINUS_N = "+M-N"
    MINUS_M_PLUS_N = "-M+N"
    PLUS_N_MINUS_M = "+N-M"
    MINUS_N_PLUS_M = "-N+M"
    PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N = "+N-MF(N)"
    MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N = "-N+MF(N)"
    PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM = "+N-MF(N+M)"
    MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM = "-N+MF(N+M)"


def _is_odd(value: int) -> bool:
    return value % 2 != 0


# (N, M) -> (new N, new M, negate multiplier)
_TRANSFORMS: Dict[Relationship, Callable[[int, int], Tuple[int, int, bool]]] = {
    Relationship.PLUS_N_PLUS_M: lambda n, m: (n, m, False),
    Relationship.PLUS_M_PLUS_N: lambda n, m: (m, n, False),
    Relationship.MINUS_N_MINUS_M: lambda n, m: (-n, -m, False),
    Relationship.MINUS_M_MINUS_N: lambda n, m: (-m, -n, False),
    Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE: lambda n, m: (m, n, _is_odd(n + m)),
    Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE: lambda n, m: (-m, -n, _is_odd(n + m)),
    Relationship.PLUS_M_MINUS_SUM_N_AND_M: lambda n, m: (m, -(n + m), False),
    Relationship.MINUS_SUM_N_AND_M_PLUS_N: lambda n, m: (-(n + m), n, False),
    Relationship.PLUS_M_MINUS_N: lambda n, m: (m, -n, False),
    Relationship.MINUS_M_PLUS_N: lambda n, m: (-m, n, False),
    Relationship.PLUS_N_MINUS_M: lambda n, m: (n, -m, False),
    Relationship.MINUS_N_PLUS_M: lambda n, m: (-n, m, False),
    Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N: lambda n, m: (n, -m, _is_odd(n)),
    Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N: lambda n, m: (-n, m, _is_odd(n)),
    Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM: lambda n, m: (n, -m, _is_odd(n + m)),
    Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM: lambda n, m: (-n, m, _is_odd(n + m)),
}


def parse_relationship(code: str) -> Relationship:
    """Look up a relationship by its configuration code, e.g. ``"+M+N"``."""
    try:
        return Relationship(code)
    except ValueError:
        valid = ", ".join(r.value for r in Relationship)
        raise ValueError(f"unknown coefficient relationship {code!r}, expected one of: {valid}")


@dataclass(frozen=True)
class Pairing:
    """A pair of powers plus whether the multiplier should be negated."""
    power_n: int
    power_m: int
    negate_multiplier: bool = False

    def generate_coefficient_sets(self, relationships: Iterable[Relationship]) -> List['Pairing']:
        """
        Apply each relationship to this pairing.

        Args:
            relationships: Relationships to apply, in order

        Returns:
            One new pairing per relationship, in the same order
        """
        pairings = []
        for relationship in relationships:
            new_n, new_m, negate = _TRANSFORMS[relationship](self.power_n, self.power_m)
            pairings.append(Pairing(new_n, new_m, negate))
        return pairings
