"""adfsat/sat — Propositional mapping, solver states and clause encodings."""

from adfsat.sat.encodings import (
    ClauseSink,
    CompleteCandidateSatEncoding,
    ConflictFreeInterpretationSatEncoding,
    DefinitionalSatEncoding,
    RefineLargerSatEncoding,
    RefineUnequalSatEncoding,
    SatEncoding,
    TseitinTransformer,
    TwoValuedModelSatEncoding,
)
from adfsat.sat.mapping import PropositionalMapping
from adfsat.sat.state import SatSolver, SatSolverState, Z3SatSolver, Z3SatSolverState

__all__ = [
    "ClauseSink",
    "CompleteCandidateSatEncoding",
    "ConflictFreeInterpretationSatEncoding",
    "DefinitionalSatEncoding",
    "RefineLargerSatEncoding",
    "RefineUnequalSatEncoding",
    "SatEncoding",
    "TseitinTransformer",
    "TwoValuedModelSatEncoding",
    "PropositionalMapping",
    "SatSolver",
    "SatSolverState",
    "Z3SatSolver",
    "Z3SatSolverState",
]
