"""
Symmetry tags, relationship detection between wave packets, and the
desired-symmetry expansion used by the wallpaper formulas.

Detection works on the first term of each wave packet plus the packet
multiplier. Two packets are related by a coefficient relationship when the
second packet's powers are the first packet's powers rewritten by that
relationship, and the multipliers agree (or are negated, for the relationships
that flip the multiplier on odd powers).

A wallpaper group is present when the packets can be paired off so that every
relationship the group needs shows up:

    Hexagonal:   p31m  +M+N
                 p3m1  -M-N
                 p6    -N-M
                 p6m   -N-M, -M-N, +M+N
    Square:      p4m   +M+N
                 p4g   +M+NF
    Rectangular: pm    +N-M
                 pg    +N-MF(N)
                 pmm   +N-M, -N-M, -N+M
                 pmg   -N-M, +N-MF(N), -N+MF(N)
                 pgg   -N-M, +N-MF(N+M), -N+MF(N+M)
    Rhombic:     cm    +M+N
                 cmm   -N-M, -M-N, +M+N
    Generic:     p2    -N-M
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Union

from .coefficient import Relationship
from .errors import UnsupportedSymmetryError
from .term import Term
from .wave_packet import WavePacket


class Symmetry(Enum):
    P1 = "p1"
    P2 = "p2"
    P3 = "p3"
    P3M1 = "p3m1"
    P31M = "p31m"
    P6 = "p6"
    P6M = "p6m"
    P4 = "p4"
    P4M = "p4m"
    P4G = "p4g"
    CM = "cm"
    CMM = "cmm"
    PM = "pm"
    PG = "pg"
    PGG = "pgg"
    PMM = "pmm"
    PMG = "pmg"
    # Frieze groups
    P111 = "p111"
    P11M = "p11m"
    P211 = "p211"
    P1M1 = "p1m1"
    P11G = "p11g"
    P2MM = "p2mm"
    P2MG = "p2mg"


FRIEZE_SYMMETRIES = [
    Symmetry.P111,
    Symmetry.P11M,
    Symmetry.P211,
    Symmetry.P1M1,
    Symmetry.P11G,
    Symmetry.P2MM,
    Symmetry.P2MG,
]


def parse_symmetry(value: Union[Symmetry, str, None]) -> Optional[Symmetry]:
    """
    Resolve a desired symmetry given as an enum member or its tag.

    Matching is case-sensitive. None and the empty string mean "no desired
    symmetry".

    Raises:
        UnsupportedSymmetryError: if the tag is not a known symmetry
    """
    if value is None or value == "":
        return None
    if isinstance(value, Symmetry):
        return value
    try:
        return Symmetry(value)
    except ValueError:
        raise UnsupportedSymmetryError(f"unknown symmetry {value!r}")


def _same(multiplier1: complex, multiplier2: complex) -> bool:
    return multiplier1.real == multiplier2.real and multiplier1.imag == multiplier2.imag


def _negated(multiplier1: complex, multiplier2: complex) -> bool:
    return multiplier1.real == -multiplier2.real and multiplier1.imag == -multiplier2.imag


def _multiplier_matches_parity(is_even: bool, multiplier1: complex, multiplier2: complex) -> bool:
    # Even parity keeps the multiplier, odd parity negates it.
    if is_even:
        return _same(multiplier1, multiplier2)
    return _negated(multiplier1, multiplier2)


def _multiplier_differs_on_odd(is_even: bool, multiplier1: complex, multiplier2: complex) -> bool:
    if is_even:
        return _same(multiplier1, multiplier2)
    return not _same(multiplier1, multiplier2)


_Checker = Callable[[Term, Term, complex, complex], bool]

_RELATIONSHIP_CHECKERS: Dict[Relationship, _Checker] = {
    Relationship.PLUS_N_PLUS_M: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t1.power_n == t2.power_n and t1.power_m == t2.power_m),
    Relationship.PLUS_M_PLUS_N: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t1.power_n == t2.power_m and t1.power_m == t2.power_n),
    Relationship.MINUS_N_MINUS_M: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t1.power_n == -t2.power_n and t1.power_m == -t2.power_m),
    Relationship.MINUS_M_MINUS_N: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t1.power_n == -t2.power_m and t1.power_m == -t2.power_n),
    Relationship.PLUS_M_PLUS_N_MAYBE_FLIP_SCALE: lambda t1, t2, k1, k2: (
        _multiplier_matches_parity(t1.power_sum_is_even(), k1, k2)
        and t1.power_n == t2.power_m and t1.power_m == t2.power_n),
    Relationship.MINUS_M_MINUS_N_MAYBE_FLIP_SCALE: lambda t1, t2, k1, k2: (
        _multiplier_matches_parity(t1.power_sum_is_even(), k1, k2)
        and t1.power_n == -t2.power_m and t1.power_m == -t2.power_n),
    Relationship.PLUS_M_MINUS_SUM_N_AND_M: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t2.power_n == t1.power_m and t2.power_m == -(t1.power_n + t1.power_m)),
    Relationship.MINUS_SUM_N_AND_M_PLUS_N: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t2.power_n == -(t1.power_n + t1.power_m) and t2.power_m == t1.power_n),
    Relationship.PLUS_M_MINUS_N: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t2.power_n == t1.power_m and t2.power_m == -t1.power_n),
    Relationship.MINUS_M_PLUS_N: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t2.power_n == -t1.power_m and t2.power_m == t1.power_n),
    Relationship.PLUS_N_MINUS_M: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t2.power_n == t1.power_n and t2.power_m == -t1.power_m),
    Relationship.MINUS_N_PLUS_M: lambda t1, t2, k1, k2: (
        _same(k1, k2) and t2.power_n == -t1.power_n and t2.power_m == t1.power_m),
    Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N: lambda t1, t2, k1, k2: (
        _multiplier_differs_on_odd(t1.power_n_is_even(), k1, k2)
        and t2.power_n == t1.power_n and t2.power_m == -t1.power_m),
    Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_N: lambda t1, t2, k1, k2: (
        _multiplier_differs_on_odd(t1.power_n_is_even(), k1, k2)
        and t2.power_n == -t1.power_n and t2.power_m == t1.power_m),
    Relationship.PLUS_N_MINUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM: lambda t1, t2, k1, k2: (
        _multiplier_differs_on_odd(t1.power_sum_is_even(), k1, k2)
        and t2.power_n == t1.power_n and t2.power_m == -t1.power_m),
    Relationship.MINUS_N_PLUS_M_NEGATE_MULTIPLIER_IF_ODD_POWER_SUM: lambda t1, t2, k1, k2: (
        _multiplier_differs_on_odd(t1.power_sum_is_even(), k1, k2)
        and t2.power_n == -t1.power_n and t2.power_m == t1.power_m),
}


def satisfies_relationship(term1: Term, term2: Term, multiplier1: complex, multiplier2: complex,
                           relationship: Relationship) -> bool:
    """
    Check whether ``term2`` is ``term1`` rewritten by ``relationship``.

    Multipliers are compared exactly: they must be equal or exact negations of
    each other before the powers are even looked at.
    """
    multiplier1 = complex(multiplier1)
    multiplier2 = complex(multiplier2)
    if not _same(multiplier1, multiplier2) and not _negated(multiplier1, multiplier2):
        return False
    return _RELATIONSHIP_CHECKERS[relationship](term1, term2, multiplier1, multiplier2)


def get_all_possible_term_relationships(term1: Term, term2: Term,
                                        multiplier1: complex, multiplier2: complex) -> List[Relationship]:
    """Every relationship ``term1`` and ``term2`` satisfy, in enum order."""
    return [
        relationship for relationship in Relationship
        if satisfies_relationship(term1, term2, multiplier1, multiplier2, relationship)
    ]


def get_wave_packet_relationships(packet1: WavePacket, packet2: WavePacket) -> List[Relationship]:
    """Relationships between the first terms of two packets, using packet multipliers."""
    return get_all_possible_term_relationships(
        packet1.terms[0], packet2.terms[0], packet1.multiplier, packet2.multiplier)


def can_wave_packets_be_grouped_among_coefficient_relationships(
        wave_packets: Sequence[WavePacket],
        desired_relationships: Sequence[Relationship]) -> bool:
    """
    Try to pair every packet with later packets covering all desired relationships.

    Each unmatched packet A scans every later packet B. Every desired
    relationship B has with A is counted, and B is marked as matched when it
    has at least one. A fails the grouping when any desired relationship was
    never found.
    """
    matched = [False] * len(wave_packets)

    for index_a, packet_a in enumerate(wave_packets):
        if matched[index_a]:
            continue

        found = {relationship: False for relationship in desired_relationships}
        for index_b in range(index_a + 1, len(wave_packets)):
            relationships = get_wave_packet_relationships(packet_a, wave_packets[index_b])
            # A pair of coinciding companions can satisfy several at once
            for relationship in desired_relationships:
                if relationship in relationships:
                    matched[index_b] = True
                    found[relationship] = True

        if not all(found.values()):
            return False
        matched[index_a] = True

    return True


def has_symmetry(wave_packets: Sequence[WavePacket], desired_symmetry: Symmetry,
                 symmetry_to_relationships: Dict[Symmetry, List[Relationship]]) -> bool:
    """
    Check whether the packets realize ``desired_symmetry``.

    Needs an even number (at least two) of packets, since every packet has to
    be paired with a partner.
    """
    if len(wave_packets) < 2 or len(wave_packets) % 2 == 1:
        return False

    relationships = symmetry_to_relationships.get(desired_symmetry)
    if not relationships:
        return False

    return can_wave_packets_be_grouped_among_coefficient_relationships(wave_packets, relationships)


def _single_term_packet(term: Term, power_n: int, power_m: int, multiplier: complex) -> WavePacket:
    return WavePacket(
        terms=(Term(multiplier=term.multiplier, power_n=power_n, power_m=power_m),),
        multiplier=multiplier,
    )


def add_new_wave_packets_based_on_symmetry(term: Term, multiplier: complex,
                                           desired_symmetry: Optional[Symmetry]) -> List[WavePacket]:
    """
    Companion packets that turn ``term`` into a pattern with ``desired_symmetry``.

    Args:
        term: First term of the packet being expanded
        multiplier: That packet's multiplier
        desired_symmetry: Requested group, None for nothing

    Returns:
        New single-term packets, possibly empty
    """
    n = term.power_n
    m = term.power_m
    flip_on_sum = multiplier if term.power_sum_is_even() else -multiplier
    flip_on_n = multiplier if term.power_n_is_even() else -multiplier

    companions = {
        Symmetry.P31M: [(m, n, multiplier)],
        Symmetry.P4M: [(m, n, multiplier)],
        Symmetry.CM: [(m, n, multiplier)],
        Symmetry.PM: [(n, -m, multiplier)],
        Symmetry.PG: [(n, -m, flip_on_n)],
        Symmetry.PMM: [(-n, -m, multiplier), (-n, m, multiplier), (n, -m, multiplier)],
        Symmetry.PMG: [(-n, -m, multiplier), (-n, m, flip_on_n), (n, -m, flip_on_n)],
        Symmetry.PGG: [(-n, -m, multiplier), (-n, m, flip_on_sum), (n, -m, flip_on_sum)],
        Symmetry.P3M1: [(-m, -n, multiplier)],
        Symmetry.P6: [(-n, -m, multiplier)],
        Symmetry.P2: [(-n, -m, multiplier)],
        Symmetry.P6M: [(-n, -m, multiplier), (m, n, multiplier), (-m, -n, multiplier)],
        Symmetry.CMM: [(-n, -m, multiplier), (m, n, multiplier), (-m, -n, multiplier)],
        Symmetry.P4G: [(m, n, flip_on_sum)],
    }.get(desired_symmetry, [])

    return [
        _single_term_packet(term, power_n, power_m, packet_multiplier)
        for power_n, power_m, packet_multiplier in companions
    ]


def create_new_wave_packets_based_on_desired_symmetry(
        wave_packets: Sequence[WavePacket],
        desired_symmetry: Optional[Symmetry]) -> List[WavePacket]:
    """Each packet followed by the companions ``desired_symmetry`` asks for."""
    expanded = []
    for packet in wave_packets:
        expanded.append(packet)
        expanded.extend(add_new_wave_packets_based_on_symmetry(
            packet.terms[0], packet.multiplier, desired_symmetry))
    return expanded
