"""
adfsat/sat/state.py
===================
Incremental SAT solver layer — wraps Z3 behind a minimal protocol.

The reasoning core depends on exactly three solver capabilities:
    add(clause)                 permanently conjoin a clause
    witness(literals)           solve; project one model onto `literals`
    close()                     release solver resources

Any backend implementing SatSolver / SatSolverState is interchangeable.

Mathematical basis:
    Clauses accumulate monotonically: F₀ ⊆ F₁ ⊆ … Each witness call
    decides satisfiability of the current conjunction Fᵢ (optionally
    under assumption literals, which hold for that call only).

    Reference: De Moura & Bjørner (2008) "Z3: An Efficient SMT Solver".
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Iterable, Optional

import z3

from adfsat.core.config import SolverConfig
from adfsat.core.exceptions import SolverFault, UseAfterClose
from adfsat.core.types import Clause, Literal

logger = logging.getLogger(__name__)


class SatSolverState(ABC):
    """Session-scoped, mutable handle on an incremental solver.

    Must be released, preferably via ``with``:

        with solver.create_state() as state:
            state.add((1, -2))
            witness = state.witness({1, 2})

    After ``close`` every operation except ``close`` itself raises
    UseAfterClose. Closing twice is a no-op.
    """

    def __init__(self) -> None:
        self._closed = False

    # ─── PROTOCOL ──────────────────────────────────────────────────

    def add(self, clause: Clause) -> None:
        """Assert ``clause``. Never retracted."""
        self._require_open("add")
        self._add(tuple(clause))

    def witness(
        self,
        literals: Iterable[Literal],
        assumptions: Iterable[Literal] = (),
    ) -> Optional[FrozenSet[Literal]]:
        """Solve the current clause set.

        Args:
            literals:    Literals whose variables the witness is projected on.
            assumptions: Literals assumed true for this call only.

        Returns:
            None if unsatisfiable, else the set of literals over the
            requested variables that hold in one satisfying assignment
            (exactly one of v / -v per requested variable v).

        Raises:
            SolverFault: if the solver fails or cannot decide.
        """
        self._require_open("witness")
        return self._witness(frozenset(abs(lit) for lit in literals), tuple(assumptions))

    def satisfiable(self, assumptions: Iterable[Literal] = ()) -> bool:
        """Satisfiability check without model extraction."""
        return self.witness((), assumptions) is not None

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._release()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "SatSolverState":
        self._require_open("__enter__")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_open(self, operation: str) -> None:
        if self._closed:
            raise UseAfterClose(type(self).__name__, operation)

    # ─── BACKEND HOOKS ─────────────────────────────────────────────

    @abstractmethod
    def _add(self, clause: Clause) -> None: ...

    @abstractmethod
    def _witness(
        self,
        variables: FrozenSet[int],
        assumptions: tuple,
    ) -> Optional[FrozenSet[Literal]]: ...

    @abstractmethod
    def _release(self) -> None: ...


class SatSolver(ABC):
    """Factory of independent solver states (one per session/verifier)."""

    @abstractmethod
    def create_state(self) -> SatSolverState: ...

    @classmethod
    def from_config(cls, config: Optional[SolverConfig] = None) -> "SatSolver":
        config = config or SolverConfig()
        if config.backend == "z3":
            return Z3SatSolver(timeout_ms=config.timeout_ms, random_seed=config.random_seed)
        raise ValueError(f"Unsupported SAT backend '{config.backend}'.")  # pragma: no cover


# ─────────────────────────────────────────────
#  Z3 BACKEND
# ─────────────────────────────────────────────


class Z3SatSolver(SatSolver):
    """Creates Z3-backed solver states.

    Usage:
        solver = Z3SatSolver(timeout_ms=5000)
        with solver.create_state() as state:
            ...
    """

    def __init__(self, timeout_ms: Optional[int] = None, random_seed: Optional[int] = None):
        self.timeout_ms = timeout_ms
        self.random_seed = random_seed

    def create_state(self) -> "Z3SatSolverState":
        return Z3SatSolverState(timeout_ms=self.timeout_ms, random_seed=self.random_seed)


class Z3SatSolverState(SatSolverState):
    """SatSolverState over a dedicated ``z3.Solver`` and z3 context.

    Variable v maps to the Z3 Bool ``x<v>``; clauses become ``z3.Or``.
    """

    def __init__(self, timeout_ms: Optional[int] = None, random_seed: Optional[int] = None):
        super().__init__()
        self._ctx = z3.Context()
        self._solver = z3.Solver(ctx=self._ctx)
        if timeout_ms is not None:
            self._solver.set("timeout", timeout_ms)
        if random_seed is not None:
            self._solver.set("random_seed", random_seed)
        self._vars: Dict[int, z3.BoolRef] = {}
        self._clause_count = 0

    @property
    def clause_count(self) -> int:
        return self._clause_count

    def _var(self, v: int) -> "z3.BoolRef":
        var = self._vars.get(v)
        if var is None:
            var = z3.Bool(f"x{v}", self._ctx)
            self._vars[v] = var
        return var

    def _to_z3(self, literal: Literal) -> "z3.BoolRef":
        if literal == 0:
            raise ValueError("0 is not a valid literal.")
        var = self._var(abs(literal))
        return var if literal > 0 else z3.Not(var, self._ctx)

    def _add(self, clause: Clause) -> None:
        terms = [self._to_z3(lit) for lit in clause]
        if not terms:
            expr = z3.BoolVal(False, self._ctx)
        elif len(terms) == 1:
            expr = terms[0]
        else:
            expr = z3.Or(terms)
        try:
            self._solver.add(expr)
        except z3.Z3Exception as e:
            raise SolverFault("Z3 rejected clause.", reason=str(e), context={"clause": clause}) from e
        self._clause_count += 1
        logger.debug("Clause added: %s", clause)

    def _witness(
        self,
        variables: FrozenSet[int],
        assumptions: tuple,
    ) -> Optional[FrozenSet[Literal]]:
        try:
            result = self._solver.check(*[self._to_z3(lit) for lit in assumptions])
        except z3.Z3Exception as e:
            raise SolverFault("Z3 check failed.", reason=str(e)) from e

        if result == z3.unsat:
            logger.debug("UNSAT under %d assumption(s)", len(assumptions))
            return None
        if result != z3.sat:
            reason = self._solver.reason_unknown()
            logger.warning("Z3 returned UNKNOWN (%s)", reason)
            raise SolverFault(
                "SAT solver could not decide the clause set.",
                reason=reason,
                context={"clauses": self._clause_count},
            )

        model = self._solver.model()
        witness = frozenset(
            v if z3.is_true(model.eval(self._var(v), model_completion=True)) else -v
            for v in variables
        )
        logger.debug("SAT — witness over %d variable(s)", len(witness))
        return witness

    def _release(self) -> None:
        self._solver.reset()
        self._solver = None
        self._vars.clear()
        self._ctx = None
        logger.debug("Solver state released after %d clause(s)", self._clause_count)
