from .symmetry_verifier import (
    FormulaSymmetryVerifier,
    FormulaVerificationResult,
    SymmetryResult,
    ROTATION_ORDER,
)

__all__ = [
    'FormulaSymmetryVerifier',
    'FormulaVerificationResult',
    'SymmetryResult',
    'ROTATION_ORDER',
]
