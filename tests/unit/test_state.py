"""
tests/unit/test_state.py
========================
Tests for adfsat/sat/state.py — the incremental z3 solver state.

Tests cover:
    - add / witness / satisfiable, projection and assumptions (real Z3 calls)
    - lifecycle: close, idempotent close, context manager, UseAfterClose
    - Z3 unknown results and Z3Exception surfaced as SolverFault
    - SatSolver.from_config
"""
from unittest.mock import patch

import pytest
import z3

from adfsat.core.config import SolverConfig
from adfsat.core.exceptions import SolverFault, UseAfterClose
from adfsat.sat.state import SatSolver, Z3SatSolver, Z3SatSolverState


@pytest.fixture
def state():
    with Z3SatSolver().create_state() as s:
        yield s


class TestWitness:
    def test_satisfying_witness(self, state):
        state.add((1, 2))
        state.add((-1,))
        assert state.witness({1, 2}) == {-1, 2}

    def test_unsat_returns_none(self, state):
        state.add((1,))
        state.add((-1,))
        assert state.witness({1}) is None
        assert not state.satisfiable()

    def test_empty_clause_is_unsat(self, state):
        state.add(())
        assert state.witness({1}) is None

    def test_projection_uses_variables(self, state):
        state.add((1, 2))
        state.add((3,))
        witness = state.witness({-3})
        assert witness == {3}

    def test_unconstrained_variable_is_reported(self, state):
        witness = state.witness({5})
        assert witness in ({5}, {-5})

    def test_assumptions_hold_for_one_call_only(self, state):
        state.add((1, 2))
        assert state.witness({1, 2}, assumptions=[-1]) == {-1, 2}
        assert not state.satisfiable([-1, -2])
        assert state.satisfiable([1, -2])
        assert state.satisfiable()

    def test_clauses_accumulate(self, state):
        state.add((1, 2))
        state.add((-2,))
        assert state.clause_count == 2
        assert state.witness({1}) == {1}

    def test_zero_literal_rejected(self, state):
        with pytest.raises(ValueError):
            state.add((0,))


class TestLifecycle:
    def test_use_after_close(self):
        state = Z3SatSolver().create_state()
        state.close()
        assert state.closed
        with pytest.raises(UseAfterClose):
            state.add((1,))
        with pytest.raises(UseAfterClose):
            state.witness({1})

    def test_close_is_idempotent(self):
        state = Z3SatSolver().create_state()
        state.close()
        state.close()
        assert state.closed

    def test_context_manager_closes(self):
        with Z3SatSolver().create_state() as state:
            state.add((1,))
        assert state.closed

    def test_context_manager_closes_on_error(self):
        with pytest.raises(RuntimeError):
            with Z3SatSolver().create_state() as state:
                raise RuntimeError("boom")
        assert state.closed

    def test_enter_closed_state(self):
        state = Z3SatSolver().create_state()
        state.close()
        with pytest.raises(UseAfterClose):
            with state:
                pass

    def test_states_are_independent(self):
        solver = Z3SatSolver()
        with solver.create_state() as first, solver.create_state() as second:
            first.add((1,))
            second.add((-1,))
            assert first.witness({1}) == {1}
            assert second.witness({1}) == {-1}


class TestFaults:
    def test_unknown_becomes_solver_fault(self, state):
        state.add((1,))
        with patch.object(state._solver, "check", return_value=z3.unknown), \
             patch.object(state._solver, "reason_unknown", return_value="timeout"):
            with pytest.raises(SolverFault) as exc:
                state.witness({1})
        assert exc.value.reason == "timeout"
        assert exc.value.context["clauses"] == 1

    def test_z3_exception_becomes_solver_fault(self, state):
        with patch.object(state._solver, "check", side_effect=z3.Z3Exception("out of memory")):
            with pytest.raises(SolverFault):
                state.satisfiable()


class TestFactory:
    def test_from_config(self):
        solver = SatSolver.from_config(SolverConfig(timeout_ms=250, random_seed=3))
        assert isinstance(solver, Z3SatSolver)
        assert solver.timeout_ms == 250
        assert solver.random_seed == 3

    def test_configured_state_still_solves(self):
        with Z3SatSolver(timeout_ms=10_000, random_seed=1).create_state() as state:
            assert isinstance(state, Z3SatSolverState)
            state.add((1, -2))
            assert state.satisfiable([2])
