"""
adfsat/core/types.py
====================
Foundation type system for adfsat.
Every module imports from here. No circular dependencies.

Mathematical basis:
  - An ADF is a tuple (S, L, C): arguments S, links L ⊆ S × S and one
    acceptance condition C_a per argument over its parents.
  - An Interpretation v: S → {t, f, u} is three-valued. It is
    two-valued when no argument is mapped to u.
  - The information ordering u <_i t, u <_i f lifts pointwise:
    v ≤_i w iff every decided argument of v has the same value in w.
  - Literals follow the DIMACS convention: a variable is a positive int,
    its negation is the negative int.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Tuple,
)

if TYPE_CHECKING:
    from adfsat.sat.mapping import PropositionalMapping


# ─────────────────────────────────────────────
#  PROPOSITIONAL PRIMITIVES
# ─────────────────────────────────────────────

Literal = int  # signed, non-zero
Clause = Tuple[int, ...]  # disjunction of literals


def negate(literal: Literal) -> Literal:
    return -literal


def variable(literal: Literal) -> int:
    return abs(literal)


# ─────────────────────────────────────────────
#  ENUMERATIONS
# ─────────────────────────────────────────────


class TruthValue(Enum):
    """Three-valued truth values of an interpretation."""

    TRUE = "t"
    FALSE = "f"
    UNDECIDED = "u"

    @property
    def is_decided(self) -> bool:
        return self is not TruthValue.UNDECIDED

    def negate(self) -> "TruthValue":
        if self is TruthValue.TRUE:
            return TruthValue.FALSE
        if self is TruthValue.FALSE:
            return TruthValue.TRUE
        return TruthValue.UNDECIDED

    @classmethod
    def from_bool(cls, value: bool) -> "TruthValue":
        return cls.TRUE if value else cls.FALSE


class LinkType(Enum):
    """Relation between a parent's truth value and the child's condition.

    SUPPORTING: raising the parent from f to t never falsifies the condition
    ATTACKING:  raising the parent from f to t never satisfies the condition
    DEPENDENT:  neither of the above
    REDUNDANT:  both of the above (the parent has no influence)
    """

    SUPPORTING = "+"
    ATTACKING = "-"
    DEPENDENT = "?"
    REDUNDANT = "0"


class LogicConnective(Enum):
    AND = "∧"
    OR = "∨"
    NOT = "¬"
    IMPLIES = "→"
    IFF = "↔"
    TAUTOLOGY = "⊤"
    CONTRADICTION = "⊥"


# ─────────────────────────────────────────────
#  ARGUMENTS AND LINKS
# ─────────────────────────────────────────────


@dataclass(frozen=True, order=True)
class Argument:
    """An opaque named entity of an ADF vocabulary.

    Frozen and ordered by name so arguments can be used in sets,
    as dict keys and sorted deterministically.
    """

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Argument name must be non-empty.")

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Argument({self.name})"


@dataclass(frozen=True)
class Link:
    """Directed dependency of ``target``'s acceptance condition on ``source``."""

    source: Argument
    target: Argument
    link_type: LinkType = LinkType.DEPENDENT

    @classmethod
    def of(cls, source: Argument, target: Argument, link_type: LinkType = LinkType.DEPENDENT) -> "Link":
        return cls(source=source, target=target, link_type=link_type)

    def __str__(self) -> str:
        return f"{self.source} -{self.link_type.value}-> {self.target}"


# ─────────────────────────────────────────────
#  INTERPRETATIONS
# ─────────────────────────────────────────────


@dataclass(frozen=True)
class Interpretation:
    """Immutable three-valued assignment Argument → TruthValue.

    Equality and hashing are structural over the assignment, so two
    interpretations built from different witnesses compare equal when
    they assign the same values.

    Example:
        v = Interpretation.of(satisfied=[a], unsatisfied=[b])
        v.value(a)          → TruthValue.TRUE
        v.is_two_valued()   → True
    """

    assignment: FrozenSet[Tuple[Argument, TruthValue]] = field(default_factory=frozenset)
    _values: Dict[Argument, TruthValue] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        values: Dict[Argument, TruthValue] = {}
        for argument, value in self.assignment:
            if argument in values:
                raise ValueError(f"Argument '{argument}' is assigned more than one truth value.")
            values[argument] = value
        # frozen: the lookup table is set once, here
        object.__setattr__(self, "_values", values)

    # ─── CONSTRUCTION ──────────────────────────────────────────────

    @classmethod
    def from_dict(cls, values: Mapping[Argument, TruthValue]) -> "Interpretation":
        return cls(assignment=frozenset(values.items()))

    @classmethod
    def of(
        cls,
        satisfied: Iterable[Argument] = (),
        unsatisfied: Iterable[Argument] = (),
        undecided: Iterable[Argument] = (),
    ) -> "Interpretation":
        values: Dict[Argument, TruthValue] = {}
        for argument in undecided:
            values[argument] = TruthValue.UNDECIDED
        for argument in unsatisfied:
            values[argument] = TruthValue.FALSE
        for argument in satisfied:
            if values.get(argument) is TruthValue.FALSE:
                raise ValueError(f"Argument '{argument}' is both satisfied and unsatisfied.")
            values[argument] = TruthValue.TRUE
        return cls.from_dict(values)

    @classmethod
    def from_witness(
        cls,
        witness: Iterable[Literal],
        mapping: "PropositionalMapping",
    ) -> "Interpretation":
        """Decode a two-valued witness over the argument literals.

        An argument is TRUE if its positive literal is in the witness,
        FALSE if its negative literal is, UNDECIDED otherwise.
        """
        lits = set(witness)
        values: Dict[Argument, TruthValue] = {}
        for argument in mapping.arguments:
            lit = mapping.literal(argument)
            if lit in lits:
                values[argument] = TruthValue.TRUE
            elif -lit in lits:
                values[argument] = TruthValue.FALSE
            else:
                values[argument] = TruthValue.UNDECIDED
        return cls.from_dict(values)

    @classmethod
    def from_three_valued_witness(
        cls,
        witness: Iterable[Literal],
        mapping: "PropositionalMapping",
    ) -> "Interpretation":
        """Decode a witness over the satisfied/unsatisfied literal pairs."""
        lits = set(witness)
        values: Dict[Argument, TruthValue] = {}
        for argument in mapping.arguments:
            if mapping.satisfied(argument) in lits:
                values[argument] = TruthValue.TRUE
            elif mapping.unsatisfied(argument) in lits:
                values[argument] = TruthValue.FALSE
            else:
                values[argument] = TruthValue.UNDECIDED
        return cls.from_dict(values)

    # ─── QUERIES ───────────────────────────────────────────────────

    def as_dict(self) -> Dict[Argument, TruthValue]:
        return dict(self._values)

    def value(self, argument: Argument) -> Optional[TruthValue]:
        """Truth value of ``argument`` or None if it is not assigned."""
        return self._values.get(argument)

    def arguments(self) -> FrozenSet[Argument]:
        return frozenset(self._values)

    def satisfied(self) -> FrozenSet[Argument]:
        return self._with(TruthValue.TRUE)

    def unsatisfied(self) -> FrozenSet[Argument]:
        return self._with(TruthValue.FALSE)

    def undecided(self) -> FrozenSet[Argument]:
        return self._with(TruthValue.UNDECIDED)

    def is_two_valued(self) -> bool:
        return all(val.is_decided for _, val in self.assignment)

    def is_satisfied(self, argument: Argument) -> bool:
        return self.value(argument) is TruthValue.TRUE

    def is_unsatisfied(self, argument: Argument) -> bool:
        return self.value(argument) is TruthValue.FALSE

    def is_undecided(self, argument: Argument) -> bool:
        return self.value(argument) is TruthValue.UNDECIDED

    def extends(self, other: "Interpretation") -> bool:
        """True iff other ≤_i self (every decided value of other is kept)."""
        for arg, val in other.assignment:
            if val.is_decided and self._values.get(arg) is not val:
                return False
        return True

    def completions(self) -> Iterator[Dict[Argument, bool]]:
        """All two-valued completions, as Argument → bool dicts."""
        fixed = {arg: val is TruthValue.TRUE for arg, val in self.assignment if val.is_decided}
        open_args = sorted(self.undecided())
        for mask in range(1 << len(open_args)):
            completion = dict(fixed)
            for i, arg in enumerate(open_args):
                completion[arg] = bool(mask >> i & 1)
            yield completion

    def _with(self, value: TruthValue) -> FrozenSet[Argument]:
        return frozenset(arg for arg, val in self.assignment if val is value)

    def __len__(self) -> int:
        return len(self.assignment)

    def __str__(self) -> str:
        parts = []
        for arg, val in sorted(self.assignment, key=lambda item: item[0]):
            parts.append(f"{val.value}({arg})")
        return "[" + " ".join(parts) + "]"
