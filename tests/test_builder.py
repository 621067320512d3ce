#!/usr/bin/env python3
"""
Tests for the formula Builder.

build() never raises for invalid parameters: it falls back to the Identity
formula and hands back the error.
"""

import logging

import numpy as np
import pytest
from pathlib import Path
import sys

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.formula.arbitrary import Identity
from src.formula.builder import Builder
from src.formula.coefficient import Relationship
from src.formula.errors import (
    DeserializationError,
    EmptyWavePacketError,
    MissingDimensionError,
    UnsupportedSymmetryError,
)
from src.formula.rosette import Frieze, Rosette
from src.formula.symmetry import Symmetry
from src.formula.term import Term
from src.formula.wallpaper import Generic, Hexagonal, Rectangular, Rhombic, Square
from src.formula.wave_packet import WavePacket


@pytest.fixture
def packet():
    return WavePacket(terms=(Term(power_n=1, power_m=-2),), multiplier=complex(1, 0))


class TestBuilderTypes:

    def test_default_is_identity(self):
        formula, error = Builder().build()
        assert formula == Identity()
        assert error is None

    def test_rosette(self):
        term = Term(power_n=3, power_m=0, coefficient_relationships=(Relationship.PLUS_M_PLUS_N,))
        formula, error = Builder().rosette().add_term(term).multiplier(2).build()
        assert error is None
        assert isinstance(formula, Rosette)
        assert formula.formula_level_terms() == [term]
        assert formula.multiplier == complex(2, 0)

    def test_frieze(self):
        formula, error = Builder().frieze().add_term(Term(power_n=1)).build()
        assert error is None
        assert isinstance(formula, Frieze)

    @pytest.mark.parametrize("configure,expected_type", [
        (lambda b: b.square(), Square),
        (lambda b: b.hexagonal(), Hexagonal),
        (lambda b: b.rectangular().lattice_height(0.5), Rectangular),
        (lambda b: b.rhombic().lattice_height(0.5), Rhombic),
        (lambda b: b.generic().lattice_width(0.2).lattice_height(1.1), Generic),
    ])
    def test_wallpaper_types(self, packet, configure, expected_type):
        formula, error = configure(Builder()).add_wave_packet(packet).build()
        assert error is None
        assert type(formula) is expected_type
        assert formula.wave_packets()[0].terms[0] == packet.terms[0]

    def test_desired_symmetry_by_tag(self, packet):
        formula, error = Builder().hexagonal().add_wave_packet(packet).desired_symmetry("p31m").build()
        assert error is None
        assert formula.symmetries_found() == [Symmetry.P1, Symmetry.P3, Symmetry.P31M]

    def test_desired_symmetry_by_enum(self, packet):
        formula, error = Builder().square().add_wave_packet(packet).desired_symmetry(Symmetry.P4M).build()
        assert error is None
        assert Symmetry.P4M in formula.symmetries_found()


class TestBuilderErrors:

    def test_missing_dimension(self, packet):
        formula, error = Builder().rectangular().add_wave_packet(packet).build()
        assert formula == Identity()
        assert isinstance(error, MissingDimensionError)

    def test_unsupported_symmetry(self, packet):
        formula, error = Builder().hexagonal().add_wave_packet(packet).desired_symmetry("p4m").build()
        assert formula == Identity()
        assert isinstance(error, UnsupportedSymmetryError)
        assert "hexagonal lattice can apply these desired symmetries" in str(error)

    def test_symmetry_tags_are_case_sensitive(self, packet):
        _, error = Builder().square().add_wave_packet(packet).desired_symmetry("P4M").build()
        assert isinstance(error, UnsupportedSymmetryError)

    def test_rosette_rejects_desired_symmetry(self):
        formula, error = Builder().rosette().add_term(Term(power_n=1)).desired_symmetry("p4").build()
        assert formula == Identity()
        assert isinstance(error, UnsupportedSymmetryError)

    def test_empty_wave_packet(self):
        formula, error = Builder().square().add_wave_packet(WavePacket(terms=())).build()
        assert formula == Identity()
        assert isinstance(error, EmptyWavePacketError)

    def test_failure_is_logged(self, packet, caplog):
        with caplog.at_level(logging.WARNING, logger="src.formula.builder"):
            Builder().generic().add_wave_packet(packet).build()
        assert "using identity" in caplog.text


class TestBuilderMarshalOptions:

    def test_wallpaper_options(self):
        formula, error = Builder().with_marshal_options({
            'type': 'rhombic',
            'lattice_height': 0.75,
            'desired_symmetry': 'cm',
            'multiplier': {'real': 2, 'imaginary': 0},
            'wave_packets': [
                {'multiplier': {'real': 1, 'imaginary': 0}, 'terms': [{'power_n': 1, 'power_m': -2}]},
            ],
        }).build()
        assert error is None
        assert isinstance(formula, Rhombic)
        assert formula.multiplier == complex(2, 0)
        assert formula.symmetries_found() == [Symmetry.P1, Symmetry.CM]

    def test_rosette_options(self):
        formula, error = Builder().with_marshal_options({
            'type': 'rosette',
            'terms': [
                {'power_n': 6, 'power_m': 1, 'coefficient_relationships': ['+M+N']},
                {'power_n': 11, 'power_m': 1},
            ],
        }).build()
        assert error is None
        assert formula.multifold_symmetry() == 5

    def test_invalid_options_still_build(self):
        formula, error = Builder().with_marshal_options({
            'type': 'generic',
            'lattice_width': 1,
            'wave_packets': [{'terms': [{'power_n': 1, 'power_m': 0}]}],
        }).build()
        assert formula == Identity()
        assert isinstance(error, MissingDimensionError)

    def test_unknown_type(self):
        with pytest.raises(DeserializationError, match="unknown formula type"):
            Builder().with_marshal_options({'type': 'spiral'})

    def test_bad_dimension(self):
        with pytest.raises(DeserializationError):
            Builder().with_marshal_options({'type': 'rectangular', 'lattice_height': 'tall'})

    def test_packet_without_terms(self):
        with pytest.raises(EmptyWavePacketError):
            Builder().with_marshal_options({'type': 'square', 'wave_packets': [{'terms': []}]})


class TestIdentity:

    @pytest.mark.parametrize("z", [
        complex(0.75, -0.25),
        0j,
        complex(float('inf'), 1),
        complex(float('nan'), float('nan')),
        np.array([0j, 1 + 2j, complex(-3, float('inf'))]),
    ])
    def test_calculate_returns_input_unchanged(self, z):
        result = Identity().calculate(z)
        assert result is z
        np.testing.assert_array_equal(result, z)
