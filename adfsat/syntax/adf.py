"""
adfsat/syntax/adf.py
====================
Abstract Dialectical Frameworks and their fluent builder.

An ADF is a read-only graph: every argument owns exactly one
acceptance condition, and the links are derived from the arguments
that occur in those conditions. Link types are not computed here;
a link carries the type declared through the builder, DEPENDENT
otherwise.

Usage:
    a, b = Argument("a"), Argument("b")
    adf = (AdfBuilder()
           .add(a, AcceptanceCondition.NOT(AcceptanceCondition.atom(b)))
           .add(b, AcceptanceCondition.NOT(AcceptanceCondition.atom(a)))
           .link_type(a, b, LinkType.ATTACKING)
           .build())
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from adfsat.core.exceptions import UnknownArgument
from adfsat.core.types import Argument, Link, LinkType
from adfsat.syntax.acceptance import AcceptanceCondition

logger = logging.getLogger(__name__)


class AbstractDialecticalFramework:
    """Immutable ADF D = (S, L, C).

    Arguments keep their insertion order, which also fixes the
    variable numbering of every PropositionalMapping built for it.
    """

    def __init__(
        self,
        conditions: Mapping[Argument, AcceptanceCondition],
        link_types: Optional[Mapping[Tuple[Argument, Argument], LinkType]] = None,
    ):
        self._conditions: Dict[Argument, AcceptanceCondition] = dict(conditions)
        for argument, condition in self._conditions.items():
            for parent in condition.arguments:
                if parent not in self._conditions:
                    raise UnknownArgument(
                        parent,
                        context={"acceptance_condition_of": argument.name},
                    )

        declared = dict(link_types or {})
        self._links: Dict[Tuple[Argument, Argument], Link] = {}
        for child, condition in self._conditions.items():
            for parent in sorted(condition.arguments):
                link_type = declared.pop((parent, child), LinkType.DEPENDENT)
                self._links[(parent, child)] = Link.of(parent, child, link_type)
        if declared:
            source, target = next(iter(declared))
            raise ValueError(f"Link type declared for non-existent link {source} -> {target}.")

        logger.debug(
            "ADF built: %d arguments, %d links",
            len(self._conditions),
            len(self._links),
        )

    # ─── ARGUMENTS ─────────────────────────────────────────────────

    def arguments(self) -> Tuple[Argument, ...]:
        return tuple(self._conditions)

    def __contains__(self, argument: object) -> bool:
        return argument in self._conditions

    def __iter__(self) -> Iterator[Argument]:
        return iter(self._conditions)

    def __len__(self) -> int:
        return len(self._conditions)

    def size(self) -> int:
        return len(self._conditions)

    def acceptance_condition(self, argument: Argument) -> AcceptanceCondition:
        try:
            return self._conditions[argument]
        except KeyError:
            raise UnknownArgument(argument) from None

    # ─── LINKS ─────────────────────────────────────────────────────

    def links(self) -> List[Link]:
        return list(self._links.values())

    def link(self, source: Argument, target: Argument) -> Link:
        self._require(source)
        self._require(target)
        try:
            return self._links[(source, target)]
        except KeyError:
            raise KeyError(f"No link {source} -> {target}.") from None

    def parents(self, argument: Argument) -> FrozenSet[Argument]:
        return self.acceptance_condition(argument).arguments

    def children(self, argument: Argument) -> FrozenSet[Argument]:
        self._require(argument)
        return frozenset(target for source, target in self._links if source == argument)

    def _require(self, argument: Argument) -> None:
        if argument not in self._conditions:
            raise UnknownArgument(argument)

    def __str__(self) -> str:
        lines = [f"s({a})" for a in self._conditions]
        lines += [f"ac({a},{c})" for a, c in self._conditions.items()]
        return "\n".join(lines)


class AdfBuilder:
    """Fluent builder for AbstractDialecticalFramework.

    Example:
        adf = (AdfBuilder()
               .add(a, AcceptanceCondition.atom(a))
               .build())
    """

    def __init__(self):
        self._conditions: Dict[Argument, AcceptanceCondition] = {}
        self._link_types: Dict[Tuple[Argument, Argument], LinkType] = {}

    def add(self, argument: Argument, condition: AcceptanceCondition) -> "AdfBuilder":
        if argument in self._conditions:
            raise ValueError(f"Argument '{argument}' already has an acceptance condition.")
        self._conditions[argument] = condition
        return self

    def link_type(self, source: Argument, target: Argument, link_type: LinkType) -> "AdfBuilder":
        self._link_types[(source, target)] = link_type
        return self

    def build(self) -> AbstractDialecticalFramework:
        return AbstractDialecticalFramework(self._conditions, self._link_types)
