"""
tests/unit/test_reasoner.py
===========================
Tests for adfsat/reasoner/reasoner.py — the generate-and-verify loop.

Tests cover:
    - semantics registry and create_reasoner
    - results of every semantics on small hand-checked frameworks
    - first / credulous / skeptical and max_results
    - solver state release on exhaustion, abandonment and faults
    - custom composition and construction errors
    - session logging
"""
import logging
from unittest.mock import MagicMock

import pytest

from adfsat.core.config import ReasonerConfig
from adfsat.core.exceptions import SolverFault, UnknownArgument
from adfsat.core.registry import Registry
from adfsat.core.types import Argument, Interpretation
from adfsat.reasoner.generator import ModelGenerator
from adfsat.reasoner.reasoner import (
    SEMANTICS,
    AdmissibleReasoner,
    GroundedReasoner,
    ModelReasoner,
    PreferredReasoner,
    Reasoner,
    StableReasoner,
    available_semantics,
    create_reasoner,
    register_semantics,
)
from adfsat.reasoner.verifier import StableVerifier
from adfsat.sat.state import Z3SatSolver


class RecordingSolver(Z3SatSolver):
    def __init__(self, fail_on_state=None):
        super().__init__()
        self.states = []
        self.fail_on_state = fail_on_state

    def create_state(self):
        state = super().create_state()
        self.states.append(state)
        if len(self.states) == self.fail_on_state:
            state._witness = MagicMock(side_effect=SolverFault("solver crashed", reason="test"))
        return state


def interp(satisfied=(), unsatisfied=(), undecided=()):
    return Interpretation.of(
        satisfied=[Argument(x) for x in satisfied],
        unsatisfied=[Argument(x) for x in unsatisfied],
        undecided=[Argument(x) for x in undecided],
    )


MUTUAL_ATTACK = {
    "model": {interp("a", "b"), interp("b", "a")},
    "stable": {interp("a", "b"), interp("b", "a")},
    "conflict-free": {
        interp(undecided="ab"),
        interp("a", undecided="b"), interp("b", undecided="a"),
        interp(unsatisfied="a", undecided="b"), interp(unsatisfied="b", undecided="a"),
        interp("a", "b"), interp("b", "a"),
    },
    "admissible": {interp(undecided="ab"), interp("a", "b"), interp("b", "a")},
    "complete": {interp(undecided="ab"), interp("a", "b"), interp("b", "a")},
    "preferred": {interp("a", "b"), interp("b", "a")},
    "grounded": {interp(undecided="ab")},
}

SELF_SUPPORT = {
    "model": {interp("a"), interp(unsatisfied="a")},
    "stable": {interp(unsatisfied="a")},
    "conflict-free": {interp("a"), interp(unsatisfied="a"), interp(undecided="a")},
    "admissible": {interp("a"), interp(unsatisfied="a"), interp(undecided="a")},
    "complete": {interp("a"), interp(unsatisfied="a"), interp(undecided="a")},
    "preferred": {interp("a"), interp(unsatisfied="a")},
    "grounded": {interp(undecided="a")},
}


class TestRegistry:
    def test_builtin_semantics(self):
        assert set(available_semantics()) >= {
            "model", "stable", "conflict-free", "admissible",
            "complete", "preferred", "grounded",
        }

    def test_create_reasoner(self, mutual_attack):
        reasoner = create_reasoner("preferred", mutual_attack)
        assert isinstance(reasoner, PreferredReasoner)
        assert reasoner.semantics == "preferred"

    def test_unknown_semantics(self, mutual_attack):
        with pytest.raises(KeyError):
            create_reasoner("naive", mutual_attack)

    def test_register_custom_semantics(self, mutual_attack):
        @register_semantics("two-valued-stable")
        class TwoValuedStable(StableReasoner):
            pass

        try:
            assert "two-valued-stable" in available_semantics()
            reasoner = create_reasoner("two-valued-stable", mutual_attack)
            assert set(reasoner.all()) == MUTUAL_ATTACK["stable"]
        finally:
            Registry.unregister("two-valued-stable", category=SEMANTICS)

    def test_duplicate_registration_rejected(self):
        with pytest.raises(KeyError):
            @register_semantics("model")
            class AnotherModel(ModelReasoner):
                pass


class TestSemantics:
    @pytest.mark.parametrize("semantics", sorted(MUTUAL_ATTACK))
    def test_mutual_attack(self, semantics, mutual_attack):
        results = create_reasoner(semantics, mutual_attack).all()
        assert len(results) == len(set(results))
        assert set(results) == MUTUAL_ATTACK[semantics]

    @pytest.mark.parametrize("semantics", sorted(SELF_SUPPORT))
    def test_self_support(self, semantics, self_support):
        assert set(create_reasoner(semantics, self_support).all()) == SELF_SUPPORT[semantics]

    def test_self_attack_has_no_model(self, self_attack):
        assert ModelReasoner(self_attack).all() == []
        assert ModelReasoner(self_attack).first() is None

    def test_sessions_are_independent(self, mixed):
        reasoner = AdmissibleReasoner(mixed)
        assert set(reasoner.all()) == set(reasoner.all())


class TestQueries:
    def test_first(self, mutual_attack):
        assert StableReasoner(mutual_attack).first() in MUTUAL_ATTACK["stable"]

    def test_credulous_and_skeptical(self, mutual_attack, a):
        reasoner = StableReasoner(mutual_attack)
        assert reasoner.credulous(a)
        assert not reasoner.skeptical(a)

    def test_skeptical_is_vacuous_without_results(self, self_attack, a):
        reasoner = ModelReasoner(self_attack)
        assert reasoner.skeptical(a)
        assert not reasoner.credulous(a)

    def test_grounded_skeptical(self, chain, a, c):
        reasoner = GroundedReasoner(chain)
        assert reasoner.skeptical(a)
        assert not reasoner.credulous(c)

    def test_unknown_argument(self, mutual_attack):
        reasoner = StableReasoner(mutual_attack)
        with pytest.raises(UnknownArgument):
            reasoner.credulous(Argument("z"))
        with pytest.raises(UnknownArgument):
            reasoner.skeptical(Argument("z"))

    def test_max_results(self, mutual_attack):
        reasoner = AdmissibleReasoner(mutual_attack, config=ReasonerConfig(max_results=2))
        assert len(reasoner.all()) == 2

    def test_max_results_zero(self, mutual_attack):
        config = ReasonerConfig(max_results=0)
        assert AdmissibleReasoner(mutual_attack, config=config).all() == []
        assert GroundedReasoner(mutual_attack, config=config).all() == []


class TestResources:
    def test_exhausted_session_releases_states(self, mutual_attack):
        solver = RecordingSolver()
        PreferredReasoner(mutual_attack, solver=solver).all()
        assert len(solver.states) >= 3
        assert all(state.closed for state in solver.states)

    def test_abandoned_iterator_releases_states(self, mutual_attack):
        solver = RecordingSolver()
        iterator = AdmissibleReasoner(mutual_attack, solver=solver).interpretations()
        next(iterator)
        assert not all(state.closed for state in solver.states)
        iterator.close()
        assert all(state.closed for state in solver.states)

    def test_first_releases_states(self, mutual_attack):
        solver = RecordingSolver()
        PreferredReasoner(mutual_attack, solver=solver).first()
        assert all(state.closed for state in solver.states)

    def test_fault_releases_states(self, mutual_attack):
        solver = RecordingSolver(fail_on_state=1)
        with pytest.raises(SolverFault):
            AdmissibleReasoner(mutual_attack, solver=solver).all()
        assert len(solver.states) == 2
        assert all(state.closed for state in solver.states)

    def test_verifier_fault_releases_states(self, mutual_attack):
        solver = RecordingSolver(fail_on_state=2)
        with pytest.raises(SolverFault):
            AdmissibleReasoner(mutual_attack, solver=solver).all()
        assert all(state.closed for state in solver.states)

    def test_grounded_releases_state(self, chain):
        solver = RecordingSolver()
        GroundedReasoner(chain, solver=solver).all()
        assert len(solver.states) == 1
        assert solver.states[0].closed


class TestComposition:
    def test_custom_reasoner(self, mutual_attack):
        reasoner = Reasoner(mutual_attack, generator=ModelGenerator, verifiers=[StableVerifier])
        assert set(reasoner.all()) == MUTUAL_ATTACK["stable"]
        assert reasoner.semantics == "custom"

    def test_missing_generator_rejected_at_construction(self, mutual_attack):
        with pytest.raises(ValueError):
            Reasoner(mutual_attack, verifiers=[StableVerifier])

    def test_grounded_needs_no_generator(self, mutual_attack, a, b):
        assert GroundedReasoner(mutual_attack).all() == [Interpretation.of(undecided=[a, b])]


class TestLogging:
    def test_session_is_logged(self, mutual_attack, caplog):
        caplog.set_level(logging.INFO, logger="adfsat.reasoner.reasoner")
        StableReasoner(mutual_attack).all()
        messages = [r.getMessage() for r in caplog.records]
        assert any("semantics=stable" in m and "started" in m for m in messages)
        assert any("results=2" in m for m in messages)

    def test_candidates_logged_when_enabled(self, mutual_attack, caplog):
        caplog.set_level(logging.DEBUG, logger="adfsat.reasoner.reasoner")
        ModelReasoner(mutual_attack, config=ReasonerConfig(log_candidates=True)).all()
        assert sum("Candidate #" in r.getMessage() for r in caplog.records) == 2
