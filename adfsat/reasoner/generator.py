"""
adfsat/reasoner/generator.py
============================
Candidate generators: the "generate" half of generate-and-verify.

A generator turns one SAT solver state into a stream of distinct
candidate interpretations:

    prepare(sink)      emit the candidate encoding (exactly once)
    generate(state)    witness → Interpretation, then block it

Algorithm (model enumeration by refinement):
    1. w ← state.witness(L)          L = literals the candidates live on
    2. if w is None: EXHAUSTED       unsatisfiable = nothing left
    3. v ← decode(w)
    4. state.add(RefineUnequal(v))   v can never satisfy the clauses again
    5. return v

The clause set only grows, so every later witness is a model of the
original encoding that differs from all earlier candidates on L. With
finitely many assignments over L the loop terminates, and it misses no
model because each blocking clause excludes exactly one assignment.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, Optional

from adfsat.core.exceptions import ProtocolError
from adfsat.core.types import Interpretation, Literal
from adfsat.sat.encodings import (
    ClauseSink,
    CompleteCandidateSatEncoding,
    ConflictFreeInterpretationSatEncoding,
    RefineUnequalSatEncoding,
    SatEncoding,
    TwoValuedModelSatEncoding,
)
from adfsat.sat.mapping import PropositionalMapping
from adfsat.sat.state import SatSolverState
from adfsat.syntax.adf import AbstractDialecticalFramework

logger = logging.getLogger(__name__)


class GeneratorState(Enum):
    READY = "ready"
    EXHAUSTED = "exhausted"


class CandidateGenerator(ABC):
    """Base class of all candidate generators.

    Subclasses choose the encoding, the literals a candidate is read
    from and how a witness is decoded. The generator never returns
    the same candidate twice within one solver state; the order is
    up to the solver.
    """

    three_valued: bool = False

    def __init__(self, adf: AbstractDialecticalFramework, mapping: PropositionalMapping):
        self.adf = adf
        self.mapping = mapping
        self.state = GeneratorState.READY
        self._prepared = False
        self._generated = 0

    @abstractmethod
    def encoding(self) -> SatEncoding:
        """Encoding whose models are the candidates."""

    def prepare(self, sink: ClauseSink) -> None:
        if self._prepared:
            raise ProtocolError(f"{type(self).__name__} is already prepared.")
        self.encoding().encode(sink, self.adf, self.mapping)
        self._prepared = True

    def generate(self, state: SatSolverState) -> Optional[Interpretation]:
        """Next candidate, or None once the candidates are exhausted.

        Raises:
            ProtocolError: if ``prepare`` was not called first.
        """
        if not self._prepared:
            raise ProtocolError(
                f"{type(self).__name__}.prepare() must be called before generate().",
            )
        if self.state is GeneratorState.EXHAUSTED:
            return None

        witness = state.witness(self.candidate_literals())
        if witness is None:
            self.state = GeneratorState.EXHAUSTED
            logger.debug("%s exhausted after %d candidate(s)", type(self).__name__, self._generated)
            return None

        candidate = self.decode(witness)
        RefineUnequalSatEncoding(candidate, three_valued=self.three_valued).encode(
            state.add, self.adf, self.mapping
        )
        self._generated += 1
        return candidate

    @property
    def exhausted(self) -> bool:
        return self.state is GeneratorState.EXHAUSTED

    def candidate_literals(self) -> FrozenSet[Literal]:
        if self.three_valued:
            return self.mapping.three_valued_literals()
        return self.mapping.argument_literals()

    def decode(self, witness: FrozenSet[Literal]) -> Interpretation:
        if self.three_valued:
            return Interpretation.from_three_valued_witness(witness, self.mapping)
        return Interpretation.from_witness(witness, self.mapping)


class ModelGenerator(CandidateGenerator):
    """Two-valued models of the ADF."""

    def encoding(self) -> SatEncoding:
        return TwoValuedModelSatEncoding()


class ConflictFreeGenerator(CandidateGenerator):
    """Conflict-free three-valued interpretations."""

    three_valued = True

    def encoding(self) -> SatEncoding:
        return ConflictFreeInterpretationSatEncoding()


class CompleteCandidateGenerator(CandidateGenerator):
    """Conflict-free interpretations whose undecided arguments have
    conditions that are both satisfiable and refutable."""

    three_valued = True

    def encoding(self) -> SatEncoding:
        return CompleteCandidateSatEncoding()
