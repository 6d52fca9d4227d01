"""
examples/basic_reasoning.py
=============================
Minimal adfsat example — enumerate the interpretations of a small ADF
under every built-in semantics and run a few acceptance queries.
"""
import logging

from adfsat import AcceptanceCondition as AC
from adfsat import AdfBuilder, Argument, LinkType, available_semantics, create_reasoner


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # a and b attack each other, c needs a or itself
    a, b, c = Argument("a"), Argument("b"), Argument("c")
    adf = (
        AdfBuilder()
        .add(a, AC.NOT(AC.atom(b)))
        .add(b, AC.NOT(AC.atom(a)))
        .add(c, AC.OR(AC.atom(a), AC.atom(c)))
        .link_type(b, a, LinkType.ATTACKING)
        .link_type(a, b, LinkType.ATTACKING)
        .build()
    )
    print(adf)

    for semantics in available_semantics():
        reasoner = create_reasoner(semantics, adf)
        results = reasoner.all()
        print(f"{semantics:>14}: " + ", ".join(str(v) for v in results))

    stable = create_reasoner("stable", adf)
    assert stable.credulous(a), "a is accepted in some stable model"
    assert not stable.skeptical(c), "c is not accepted in every stable model"
    print("✓ Basic reasoning example passed.")


if __name__ == "__main__":
    main()
