#!/usr/bin/env python3
"""
Numerical Symmetry Verifier for Formulas.

Formulas report the symmetries they were built with (``symmetries_found``).
This verifier checks those claims directly: it samples random points, applies
a plane isometry to them and compares the formula's output before and after.

    f(T(z)) == f(z) for every sampled z  =>  T is a symmetry of f

Supported isometries:
- Rotations about the origin (n-fold)
- Reflections across a line through the origin
- Glide reflections (reflection followed by a translation)
- Translations (lattice periods, frieze period)
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import numpy as np

from ..formula.arbitrary import Arbitrary
from ..formula.rosette import Frieze, Rosette
from ..formula.symmetry import Symmetry
from ..formula.wallpaper import WallpaperFormula


@dataclass
class SymmetryResult:
    """Result of a single symmetry check."""
    name: str
    present: bool
    max_deviation: float  # largest |f(T z) - f(z)| over the samples
    tolerance: float
    details: str = ""


@dataclass
class FormulaVerificationResult:
    """Every check run against one formula."""
    formula_name: str
    claimed_symmetries: List[Symmetry]
    verified: bool
    checks: Dict[str, SymmetryResult] = field(default_factory=dict)
    message: str = ""


# Rotation order implied by each symmetry tag (about the origin)
ROTATION_ORDER = {
    Symmetry.P1: 1,
    Symmetry.P2: 2,
    Symmetry.P3: 3,
    Symmetry.P3M1: 3,
    Symmetry.P31M: 3,
    Symmetry.P6: 6,
    Symmetry.P6M: 6,
    Symmetry.P4: 4,
    Symmetry.P4M: 4,
    Symmetry.P4G: 4,
    Symmetry.CM: 1,
    Symmetry.CMM: 2,
    Symmetry.PM: 1,
    Symmetry.PG: 1,
    Symmetry.PGG: 2,
    Symmetry.PMM: 2,
    Symmetry.PMG: 2,
    Symmetry.P111: 1,
    Symmetry.P11M: 1,
    Symmetry.P211: 2,
    Symmetry.P1M1: 1,
    Symmetry.P11G: 1,
    Symmetry.P2MM: 2,
    Symmetry.P2MG: 2,
}

FRIEZE_PERIOD = 2 * math.pi


class FormulaSymmetryVerifier:
    """
    Checks plane isometries against a formula by sampling.

    Points where either side is not finite (e.g. rosettes with negative
    powers at the origin) are skipped.
    """

    def __init__(self,
                 tolerance: float = 1e-6,
                 num_samples: int = 256,
                 sample_radius: float = 2.0,
                 seed: Optional[int] = 0):
        """
        Args:
            tolerance: Largest allowed |f(T z) - f(z)|
            num_samples: Number of random sample points
            sample_radius: Points are drawn from the square [-r, r] x [-r, r]
            seed: Seed for the sample points
        """
        self.tolerance = tolerance
        self.num_samples = num_samples
        self.sample_radius = sample_radius
        self.rng = np.random.default_rng(seed)

    def sample_points(self) -> np.ndarray:
        real = self.rng.uniform(-self.sample_radius, self.sample_radius, self.num_samples)
        imag = self.rng.uniform(-self.sample_radius, self.sample_radius, self.num_samples)
        return real + 1j * imag

    def check_isometry(self, formula: Arbitrary, isometry: Callable[[np.ndarray], np.ndarray],
                       name: str, points: Optional[np.ndarray] = None) -> SymmetryResult:
        """Compare f(isometry(z)) against f(z) over the sample points."""
        if points is None:
            points = self.sample_points()

        with np.errstate(all='ignore'):
            before = np.asarray(formula.calculate(points), dtype=complex)
            after = np.asarray(formula.calculate(isometry(points)), dtype=complex)
            before, after = np.broadcast_arrays(before, after)
            comparable = np.isfinite(before) & np.isfinite(after)
            if not comparable.any():
                return SymmetryResult(name, False, float('inf'), self.tolerance,
                                      "no finite samples to compare")
            deviation = float(np.max(np.abs(after[comparable] - before[comparable])))

        return SymmetryResult(
            name=name,
            present=deviation <= self.tolerance,
            max_deviation=deviation,
            tolerance=self.tolerance,
            details=f"{int(comparable.sum())} samples",
        )

    def check_rotation(self, formula: Arbitrary, order: int) -> SymmetryResult:
        """n-fold rotation about the origin."""
        turn = np.exp(2j * np.pi / order)
        return self.check_isometry(formula, lambda z: z * turn, f"{order}-fold rotation")

    def check_reflection(self, formula: Arbitrary, angle: float) -> SymmetryResult:
        """Reflection across the line through the origin at ``angle`` radians."""
        mirror = np.exp(2j * angle)
        return self.check_isometry(formula, lambda z: mirror * np.conj(z),
                                   f"reflection at {math.degrees(angle):.1f} deg")

    def check_glide(self, formula: Arbitrary, angle: float, translation: complex) -> SymmetryResult:
        """Reflection across the line at ``angle`` followed by ``translation``."""
        mirror = np.exp(2j * angle)
        return self.check_isometry(formula, lambda z: mirror * np.conj(z) + translation,
                                   f"glide at {math.degrees(angle):.1f} deg by {translation}")

    def check_translation(self, formula: Arbitrary, translation: complex) -> SymmetryResult:
        return self.check_isometry(formula, lambda z: z + translation, f"translation by {translation}")

    def verify(self, formula: Arbitrary, verbose: bool = False) -> FormulaVerificationResult:
        """
        Verify the periods and rotation order a formula claims.

        Wallpaper formulas are checked for translation by both lattice
        vectors, friezes for translation by 2*pi, rosettes for their multifold
        rotation. The highest rotation order implied by the claimed symmetries
        is checked too.

        Args:
            formula: Built formula
            verbose: Print each check

        Returns:
            FormulaVerificationResult
        """
        claimed = formula.symmetries_found()
        checks: Dict[str, SymmetryResult] = {}

        if isinstance(formula, WallpaperFormula):
            for index, vector in enumerate(formula.lattice_vectors(), start=1):
                checks[f'translation_v{index}'] = self.check_translation(formula, vector)
        if isinstance(formula, Frieze):
            checks['translation_period'] = self.check_translation(formula, FRIEZE_PERIOD)

        order = max([ROTATION_ORDER[symmetry] for symmetry in claimed] or [1])
        if isinstance(formula, Rosette):
            order = formula.multifold_symmetry()
        if order > 1:
            checks['rotation'] = self.check_rotation(formula, order)

        if verbose:
            for result in checks.values():
                status = "✓" if result.present else "✗"
                print(f"  {status} {result.name}: {result.max_deviation:.2e}")

        missing = [name for name, result in checks.items() if not result.present]
        formula_name = type(formula).__name__
        if missing:
            message = f"✗ {formula_name} is missing: {missing}"
        else:
            message = f"✓ {formula_name} verified"

        return FormulaVerificationResult(
            formula_name=formula_name,
            claimed_symmetries=claimed,
            verified=not missing,
            checks=checks,
            message=message,
        )
