"""
adfsat/sat/mapping.py
=====================
Bijection between ADF arguments and SAT variables.

Every argument a (in ADF order, index i) owns two variables:
    s_a = 2i + 1    "a is TRUE"   — the argument literal
    u_a = 2i + 2    "a is FALSE"  — used by three-valued encodings

Two-valued encodings only use s_a (¬s_a means "a is FALSE").
Three-valued encodings use the pair: s_a ∧ ¬u_a = t, ¬s_a ∧ u_a = f,
¬s_a ∧ ¬u_a = u.

Auxiliary variables (Tseitin definitions, per-argument parent copies,
activation literals) come from ``fresh()``, a counter starting above
the argument block, so the overall mapping stays injective.
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, FrozenSet, Tuple

from adfsat.core.exceptions import UnknownArgument
from adfsat.core.types import Argument, Literal
from adfsat.syntax.adf import AbstractDialecticalFramework

logger = logging.getLogger(__name__)


class PropositionalMapping:
    """Index-based lookup Argument → Literal for one reasoning session.

    The argument tables are fixed at construction and may be shared
    read-only between the generator and every verifier.

    Usage:
        mapping = PropositionalMapping(adf)
        mapping.literal(a)            → 1
        mapping.argument_literals()   → frozenset({1, 3})
    """

    def __init__(self, adf: AbstractDialecticalFramework):
        self._arguments: Tuple[Argument, ...] = adf.arguments()
        self._index: Dict[Argument, int] = {arg: i for i, arg in enumerate(self._arguments)}
        self._argument_literals = frozenset(self.literal(a) for a in self._arguments)
        self._three_valued_literals = frozenset(
            lit for a in self._arguments for lit in (self.satisfied(a), self.unsatisfied(a))
        )
        self._counter = itertools.count(2 * len(self._arguments) + 1)
        logger.debug("Mapping created for %d arguments", len(self._arguments))

    @property
    def arguments(self) -> Tuple[Argument, ...]:
        return self._arguments

    def index(self, argument: Argument) -> int:
        try:
            return self._index[argument]
        except KeyError:
            raise UnknownArgument(argument) from None

    def literal(self, argument: Argument) -> Literal:
        """Positive argument literal s_a."""
        return 2 * self.index(argument) + 1

    satisfied = literal

    def unsatisfied(self, argument: Argument) -> Literal:
        """Positive literal u_a of the three-valued "a is FALSE" variable."""
        return 2 * self.index(argument) + 2

    def argument_literals(self) -> FrozenSet[Literal]:
        """All argument literals, excluding auxiliary encoding variables."""
        return self._argument_literals

    def three_valued_literals(self) -> FrozenSet[Literal]:
        return self._three_valued_literals

    def fresh(self) -> Literal:
        """Allocate a new auxiliary variable."""
        return next(self._counter)

    def __contains__(self, argument: object) -> bool:
        return argument in self._index

    def __len__(self) -> int:
        return len(self._arguments)
