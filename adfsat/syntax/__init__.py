"""adfsat/syntax — Acceptance conditions and ADFs."""

from adfsat.syntax.acceptance import AcceptanceCondition
from adfsat.syntax.adf import AbstractDialecticalFramework, AdfBuilder

__all__ = [
    "AcceptanceCondition",
    "AbstractDialecticalFramework",
    "AdfBuilder",
]
