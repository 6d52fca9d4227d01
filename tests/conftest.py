"""
tests/conftest.py
=================
Shared pytest fixtures for all adfsat tests.

Besides the example frameworks, this provides ``oracle``: a brute-force
implementation of the three-valued semantics that enumerates all
interpretations and completions. It is exponential and only meant for
ADFs with a handful of arguments.
"""

import itertools
import random

import pytest

from adfsat.core.types import Argument, Interpretation, TruthValue
from adfsat.syntax.acceptance import AcceptanceCondition as AC
from adfsat.syntax.adf import AdfBuilder

T, F, U = TruthValue.TRUE, TruthValue.FALSE, TruthValue.UNDECIDED


# ─── ARGUMENTS ────────────────────────────────────────────────────


@pytest.fixture
def a():
    return Argument("a")


@pytest.fixture
def b():
    return Argument("b")


@pytest.fixture
def c():
    return Argument("c")


# ─── FRAMEWORKS ───────────────────────────────────────────────────


@pytest.fixture
def mutual_attack(a, b):
    """a = ¬b, b = ¬a."""
    return (
        AdfBuilder()
        .add(a, AC.NOT(AC.atom(b)))
        .add(b, AC.NOT(AC.atom(a)))
        .build()
    )


@pytest.fixture
def self_support(a):
    """a = a."""
    return AdfBuilder().add(a, AC.atom(a)).build()


@pytest.fixture
def self_attack(a):
    """a = ¬a, which has no two-valued model."""
    return AdfBuilder().add(a, AC.NOT(AC.atom(a))).build()


@pytest.fixture
def chain(a, b, c):
    """a = ⊤, b = a, c = ¬b ∨ c."""
    return (
        AdfBuilder()
        .add(a, AC.tautology())
        .add(b, AC.atom(a))
        .add(c, AC.OR(AC.NOT(AC.atom(b)), AC.atom(c)))
        .build()
    )


@pytest.fixture
def mixed(a, b, c):
    """a = b ↔ c, b = ¬c, c = a → ⊥ (uses every connective)."""
    return (
        AdfBuilder()
        .add(a, AC.IFF(AC.atom(b), AC.atom(c)))
        .add(b, AC.NOT(AC.atom(c)))
        .add(c, AC.IMPLIES(AC.atom(a), AC.contradiction()))
        .build()
    )


def _random_formula(rng, arguments, depth):
    if depth == 0 or rng.random() < 0.3:
        roll = rng.random()
        if roll < 0.05:
            return AC.tautology()
        if roll < 0.1:
            return AC.contradiction()
        return AC.atom(rng.choice(arguments))
    kind = rng.choice(["not", "and", "or", "implies", "iff"])
    if kind == "not":
        return AC.NOT(_random_formula(rng, arguments, depth - 1))
    if kind in ("and", "or"):
        operands = [_random_formula(rng, arguments, depth - 1) for _ in range(rng.randint(1, 3))]
        return AC.AND(*operands) if kind == "and" else AC.OR(*operands)
    left = _random_formula(rng, arguments, depth - 1)
    right = _random_formula(rng, arguments, depth - 1)
    return AC.IMPLIES(left, right) if kind == "implies" else AC.IFF(left, right)


def make_random_adfs(count, seed=7, max_arguments=4):
    rng = random.Random(seed)
    adfs = []
    for _ in range(count):
        n = rng.randint(1, max_arguments)
        arguments = [Argument(f"x{i}") for i in range(n)]
        builder = AdfBuilder()
        for argument in arguments:
            builder.add(argument, _random_formula(rng, arguments, depth=2))
        adfs.append(builder.build())
    return adfs


@pytest.fixture
def random_adfs():
    return make_random_adfs(25)


# ─── BRUTE-FORCE ORACLE ───────────────────────────────────────────


class BruteForceOracle:
    """Reference semantics by exhaustive enumeration."""

    @staticmethod
    def interpretations(adf, values=(T, F, U)):
        arguments = adf.arguments()
        for combo in itertools.product(values, repeat=len(arguments)):
            yield Interpretation.from_dict(dict(zip(arguments, combo)))

    @staticmethod
    def gamma(adf, interpretation):
        result = {}
        completions = list(interpretation.completions())
        for argument in adf.arguments():
            condition = adf.acceptance_condition(argument)
            outcomes = {condition.evaluate(w) for w in completions}
            if outcomes == {True}:
                result[argument] = T
            elif outcomes == {False}:
                result[argument] = F
            else:
                result[argument] = U
        return Interpretation.from_dict(result)

    @classmethod
    def models(cls, adf):
        return {
            v for v in cls.interpretations(adf, (T, F))
            if cls.gamma(adf, v) == v
        }

    @classmethod
    def conflict_free(cls, adf):
        result = set()
        for v in cls.interpretations(adf):
            completions = list(v.completions())
            ok = True
            for argument, value in v.as_dict().items():
                outcomes = {adf.acceptance_condition(argument).evaluate(w) for w in completions}
                if value is T and True not in outcomes:
                    ok = False
                if value is F and False not in outcomes:
                    ok = False
            if ok:
                result.add(v)
        return result

    @classmethod
    def admissible(cls, adf):
        result = set()
        for v in cls.interpretations(adf):
            g = cls.gamma(adf, v)
            if all(g.value(arg) is val for arg, val in v.as_dict().items() if val.is_decided):
                result.add(v)
        return result

    @classmethod
    def complete(cls, adf):
        return {v for v in cls.interpretations(adf) if cls.gamma(adf, v) == v}

    @classmethod
    def preferred(cls, adf):
        admissible = cls.admissible(adf)
        return {
            v for v in admissible
            if not any(w != v and w.extends(v) for w in admissible)
        }

    @classmethod
    def grounded(cls, adf):
        v = Interpretation.from_dict({arg: U for arg in adf.arguments()})
        while True:
            nxt = cls.gamma(adf, v)
            if nxt == v:
                return v
            v = nxt

    @classmethod
    def stable(cls, adf):
        result = set()
        for v in cls.models(adf):
            accepted = v.satisfied()
            w = {arg: (U if arg in accepted else F) for arg in adf.arguments()}
            while True:
                g = cls.gamma(adf, Interpretation.from_dict(w))
                nxt = dict(w)
                for arg in accepted:
                    nxt[arg] = g.value(arg)
                if nxt == w:
                    break
                w = nxt
            if all(w[arg] is T for arg in accepted):
                result.add(v)
        return result


@pytest.fixture
def oracle():
    return BruteForceOracle
