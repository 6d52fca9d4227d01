"""
adfsat/reasoner/reasoner.py
===========================
Main reasoner loop: orchestrates one generator and a verifier chain
over a single SAT session, yielding the interpretations of a semantics.

This is the entry point of the package.
All semantics are reasoners that differ only in their components:

    semantics       generator                    verifier chain
    ─────────────   ──────────────────────────   ─────────────────────────
    model           ModelGenerator               —
    stable          ModelGenerator               StableVerifier
    conflict-free   ConflictFreeGenerator        —
    admissible      ConflictFreeGenerator        AdmissibleVerifier
    complete        CompleteCandidateGenerator   AdmissibleVerifier
    preferred       ConflictFreeGenerator        AdmissibleVerifier, MaximalityVerifier
    grounded        Γ fixpoint (single result)

Usage:
    reasoner = AdmissibleReasoner(adf)
    for interpretation in reasoner.interpretations():
        print(interpretation)

    create_reasoner("stable", adf).credulous(Argument("a"))
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Callable, Iterator, List, Optional, Sequence, Type

from adfsat.core.config import DEFAULT_CONFIG, ReasonerConfig
from adfsat.core.exceptions import UnknownArgument
from adfsat.core.registry import Registry
from adfsat.core.types import Argument, Interpretation
from adfsat.reasoner.generator import (
    CandidateGenerator,
    CompleteCandidateGenerator,
    ConflictFreeGenerator,
    ModelGenerator,
)
from adfsat.reasoner.verifier import (
    AdmissibleVerifier,
    MaximalityVerifier,
    StableVerifier,
    Verifier,
    grounded_fixpoint,
)
from adfsat.sat.encodings import DefinitionalSatEncoding
from adfsat.sat.mapping import PropositionalMapping
from adfsat.sat.state import SatSolver
from adfsat.syntax.adf import AbstractDialecticalFramework

logger = logging.getLogger(__name__)

SEMANTICS = "semantics"

GeneratorFactory = Callable[[AbstractDialecticalFramework, PropositionalMapping], CandidateGenerator]
VerifierFactory = Callable[[AbstractDialecticalFramework, PropositionalMapping, SatSolver], Verifier]


def register_semantics(name: str):
    """Class decorator registering a reasoner under a semantics name."""
    def _register(cls):
        cls.semantics = name
        Registry.register(name, cls, category=SEMANTICS)
        return cls
    return _register


def available_semantics() -> List[str]:
    return Registry.names(SEMANTICS)


def create_reasoner(semantics: str, adf: AbstractDialecticalFramework, **kwargs) -> "Reasoner":
    """Instantiate the reasoner registered for ``semantics``.

    Raises:
        KeyError: if no reasoner is registered under that name.
    """
    return Registry.get(semantics, category=SEMANTICS)(adf, **kwargs)


class Reasoner:
    """Generate-and-verify enumeration of interpretations.

    Each call to ``interpretations()`` opens a fresh session: a new
    mapping, generator, solver state and verifier chain. The returned
    iterator is lazy and finite; exhausting or abandoning it releases
    every solver resource of the session, on error paths too.

    Custom semantics can be composed without subclassing:
        Reasoner(adf, generator=ModelGenerator, verifiers=[StableVerifier])
    """

    semantics = "custom"
    requires_generator = True

    def __init__(
        self,
        adf: AbstractDialecticalFramework,
        generator: Optional[GeneratorFactory] = None,
        verifiers: Sequence[VerifierFactory] = (),
        solver: Optional[SatSolver] = None,
        config: Optional[ReasonerConfig] = None,
    ):
        self.adf = adf
        self.config = config or DEFAULT_CONFIG.reasoner
        self.solver = solver or SatSolver.from_config(self.config.solver)
        if generator is None and self.requires_generator:
            raise ValueError(f"{type(self).__name__} needs a candidate generator.")
        self._generator_factory = generator
        self._verifier_factories = list(verifiers)

    # ─── COMPONENTS ────────────────────────────────────────────────

    def create_generator(self, mapping: PropositionalMapping) -> CandidateGenerator:
        return self._generator_factory(self.adf, mapping)

    def create_verifiers(self, mapping: PropositionalMapping) -> List[Verifier]:
        return [factory(self.adf, mapping, self.solver) for factory in self._verifier_factories]

    # ─── MAIN LOOP ─────────────────────────────────────────────────

    def interpretations(self) -> Iterator[Interpretation]:
        """Lazily enumerate every interpretation of the semantics.

        Raises:
            SolverFault: if the SAT solver fails (resources are released first).
        """
        mapping = PropositionalMapping(self.adf)
        generator = self.create_generator(mapping)
        verifiers = self.create_verifiers(mapping)
        limit = self.config.max_results
        candidates = accepted = 0

        logger.info(
            "Reasoning session started: semantics=%s, arguments=%d, verifiers=%d",
            self.semantics, len(self.adf), len(verifiers),
        )
        with ExitStack() as stack:
            state = stack.enter_context(self.solver.create_state())
            for verifier in verifiers:
                stack.enter_context(verifier)
                verifier.prepare()
            generator.prepare(state.add)

            while limit is None or accepted < limit:
                candidate = generator.generate(state)
                if candidate is None:
                    break
                candidates += 1
                if self.config.log_candidates:
                    logger.debug("Candidate #%d: %s", candidates, candidate)
                if all(verifier.verify(candidate) for verifier in verifiers):
                    accepted += 1
                    yield candidate

        logger.info(
            "Reasoning session finished: semantics=%s, candidates=%d, results=%d",
            self.semantics, candidates, accepted,
        )

    # ─── QUERIES ───────────────────────────────────────────────────

    def _require(self, argument: Argument) -> None:
        if argument not in self.adf:
            raise UnknownArgument(argument)

    def all(self) -> List[Interpretation]:
        return list(self.interpretations())

    def first(self) -> Optional[Interpretation]:
        iterator = self.interpretations()
        try:
            return next(iterator, None)
        finally:
            iterator.close()

    def credulous(self, argument: Argument) -> bool:
        """True iff ``argument`` is TRUE in some interpretation."""
        self._require(argument)
        iterator = self.interpretations()
        try:
            return any(i.is_satisfied(argument) for i in iterator)
        finally:
            iterator.close()

    def skeptical(self, argument: Argument) -> bool:
        """True iff ``argument`` is TRUE in every interpretation (vacuously
        True when there are none)."""
        self._require(argument)
        iterator = self.interpretations()
        try:
            return all(i.is_satisfied(argument) for i in iterator)
        finally:
            iterator.close()


# ─────────────────────────────────────────────
#  SEMANTICS
# ─────────────────────────────────────────────


class _FixedReasoner(Reasoner):
    """Reasoner whose components are fixed by class attributes."""

    generator_class: Optional[Type[CandidateGenerator]] = None
    verifier_classes: Sequence[Type[Verifier]] = ()

    def __init__(
        self,
        adf: AbstractDialecticalFramework,
        solver: Optional[SatSolver] = None,
        config: Optional[ReasonerConfig] = None,
    ):
        super().__init__(
            adf,
            generator=self.generator_class,
            verifiers=self.verifier_classes,
            solver=solver,
            config=config,
        )


@register_semantics("model")
class ModelReasoner(_FixedReasoner):
    generator_class = ModelGenerator


@register_semantics("stable")
class StableReasoner(_FixedReasoner):
    generator_class = ModelGenerator
    verifier_classes = (StableVerifier,)


@register_semantics("conflict-free")
class ConflictFreeReasoner(_FixedReasoner):
    generator_class = ConflictFreeGenerator


@register_semantics("admissible")
class AdmissibleReasoner(_FixedReasoner):
    generator_class = ConflictFreeGenerator
    verifier_classes = (AdmissibleVerifier,)


@register_semantics("complete")
class CompleteReasoner(_FixedReasoner):
    generator_class = CompleteCandidateGenerator
    verifier_classes = (AdmissibleVerifier,)


@register_semantics("preferred")
class PreferredReasoner(_FixedReasoner):
    generator_class = ConflictFreeGenerator
    verifier_classes = (AdmissibleVerifier, MaximalityVerifier)


@register_semantics("grounded")
class GroundedReasoner(_FixedReasoner):
    """The unique grounded interpretation, by Γ iteration from all-undecided."""

    requires_generator = False

    def interpretations(self) -> Iterator[Interpretation]:
        if self.config.max_results == 0:
            return
        mapping = PropositionalMapping(self.adf)
        with self.solver.create_state() as state:
            encoding = DefinitionalSatEncoding()
            encoding.encode(state.add, self.adf, mapping)
            values = grounded_fixpoint(state, mapping, encoding.definitions, mapping.arguments)
        logger.info("Grounded interpretation computed for %d arguments", len(mapping))
        yield Interpretation.from_dict(values)
