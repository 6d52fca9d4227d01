"""
adfsat/syntax/acceptance.py
===========================
Acceptance conditions: propositional formulas over ADF arguments.

An acceptance condition C_a states when argument a may be accepted,
given the truth values of its parents. Formulas are immutable trees:

    leaf:      an Argument (atom), ⊤ or ⊥
    internal:  ¬, ∧, ∨, →, ↔ over sub-formulas

Examples:
    a, b = Argument("a"), Argument("b")
    AcceptanceCondition.NOT(AcceptanceCondition.atom(b))     # C_a = ¬b
    AcceptanceCondition.AND(atom(a), atom(b))                # C_c = a ∧ b
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Mapping, Optional, Tuple, TypeVar

from adfsat.core.types import Argument, LogicConnective


T = TypeVar("T")


@dataclass(frozen=True)
class AcceptanceCondition:
    """A propositional formula whose atoms are Arguments.

    Representation:
        argument:   leaf node (atomic formula)
        connective: logical operator for this node (⊤/⊥ have no children)
        children:   sub-formulas
    """

    argument: Optional[Argument] = None
    connective: Optional[LogicConnective] = None
    children: Tuple["AcceptanceCondition", ...] = ()

    def __post_init__(self) -> None:
        if (self.argument is None) == (self.connective is None):
            raise ValueError("Exactly one of argument or connective must be set.")
        arity = _ARITY.get(self.connective) if self.connective else 0
        if arity is not None and len(self.children) != arity:
            raise ValueError(f"Connective {self.connective.name} expects {arity} operand(s), got {len(self.children)}.")
        if self.connective in (LogicConnective.AND, LogicConnective.OR) and not self.children:
            raise ValueError(f"Connective {self.connective.name} needs at least one operand.")

    # ─── CONSTRUCTORS ──────────────────────────────────────────────

    @classmethod
    def atom(cls, argument: Argument) -> "AcceptanceCondition":
        return cls(argument=argument)

    @classmethod
    def tautology(cls) -> "AcceptanceCondition":
        return cls(connective=LogicConnective.TAUTOLOGY)

    @classmethod
    def contradiction(cls) -> "AcceptanceCondition":
        return cls(connective=LogicConnective.CONTRADICTION)

    @classmethod
    def NOT(cls, f: "AcceptanceCondition") -> "AcceptanceCondition":
        return cls(connective=LogicConnective.NOT, children=(f,))

    @classmethod
    def AND(cls, *formulas: "AcceptanceCondition") -> "AcceptanceCondition":
        return cls(connective=LogicConnective.AND, children=tuple(formulas))

    @classmethod
    def OR(cls, *formulas: "AcceptanceCondition") -> "AcceptanceCondition":
        return cls(connective=LogicConnective.OR, children=tuple(formulas))

    @classmethod
    def IMPLIES(cls, antecedent: "AcceptanceCondition", consequent: "AcceptanceCondition") -> "AcceptanceCondition":
        return cls(connective=LogicConnective.IMPLIES, children=(antecedent, consequent))

    @classmethod
    def IFF(cls, left: "AcceptanceCondition", right: "AcceptanceCondition") -> "AcceptanceCondition":
        return cls(connective=LogicConnective.IFF, children=(left, right))

    # ─── QUERIES ───────────────────────────────────────────────────

    def is_atom(self) -> bool:
        return self.argument is not None

    def is_constant(self) -> bool:
        return self.connective in (LogicConnective.TAUTOLOGY, LogicConnective.CONTRADICTION)

    @property
    def arguments(self) -> FrozenSet[Argument]:
        """All arguments occurring in the formula (the parents)."""
        if self.is_atom():
            return frozenset((self.argument,))
        result: FrozenSet[Argument] = frozenset()
        for child in self.children:
            result |= child.arguments
        return result

    def evaluate(self, assignment: Mapping[Argument, bool]) -> bool:
        """Two-valued evaluation. Raises KeyError for unassigned atoms."""
        return self.fold(
            lambda arg: assignment[arg],
            _evaluate_connective,
        )

    def fold(
        self,
        on_atom: Callable[[Argument], T],
        on_node: Callable[[LogicConnective, Tuple[T, ...]], T],
    ) -> T:
        """Bottom-up traversal: atoms map through ``on_atom``, inner
        nodes combine already-folded children through ``on_node``."""
        if self.is_atom():
            return on_atom(self.argument)
        return on_node(self.connective, tuple(c.fold(on_atom, on_node) for c in self.children))

    def __str__(self) -> str:
        if self.is_atom():
            return str(self.argument)
        if self.is_constant():
            return self.connective.value
        if self.connective == LogicConnective.NOT:
            return f"¬{self.children[0]}"
        sep = f" {self.connective.value} "
        return "(" + sep.join(str(c) for c in self.children) + ")"


_ARITY = {
    LogicConnective.TAUTOLOGY: 0,
    LogicConnective.CONTRADICTION: 0,
    LogicConnective.NOT: 1,
    LogicConnective.IMPLIES: 2,
    LogicConnective.IFF: 2,
    LogicConnective.AND: None,  # n-ary
    LogicConnective.OR: None,
}


def _evaluate_connective(connective: LogicConnective, values: Tuple[bool, ...]) -> bool:
    if connective == LogicConnective.TAUTOLOGY:
        return True
    if connective == LogicConnective.CONTRADICTION:
        return False
    if connective == LogicConnective.NOT:
        return not values[0]
    if connective == LogicConnective.AND:
        return all(values)
    if connective == LogicConnective.OR:
        return any(values)
    if connective == LogicConnective.IMPLIES:
        return (not values[0]) or values[1]
    if connective == LogicConnective.IFF:
        return values[0] == values[1]
    raise ValueError(f"Unsupported connective: {connective}")  # pragma: no cover
