"""
adfsat/__init__.py — Public API exports
"""

from adfsat.core.config import AdfSatConfig, ReasonerConfig, SolverConfig
from adfsat.core.exceptions import (
    AdfSatError,
    ProtocolError,
    SolverFault,
    UnknownArgument,
    UseAfterClose,
)
from adfsat.core.types import (
    Argument,
    Interpretation,
    Link,
    LinkType,
    TruthValue,
)
from adfsat.reasoner import (
    AdmissibleReasoner,
    CompleteReasoner,
    ConflictFreeReasoner,
    GroundedReasoner,
    ModelReasoner,
    PreferredReasoner,
    Reasoner,
    StableReasoner,
    available_semantics,
    create_reasoner,
)
from adfsat.syntax import AbstractDialecticalFramework, AcceptanceCondition, AdfBuilder
from adfsat.version import __version__

__all__ = [
    "AbstractDialecticalFramework",
    "AcceptanceCondition",
    "AdfBuilder",
    "Argument",
    "Interpretation",
    "Link",
    "LinkType",
    "TruthValue",
    "Reasoner",
    "ModelReasoner",
    "StableReasoner",
    "ConflictFreeReasoner",
    "AdmissibleReasoner",
    "CompleteReasoner",
    "PreferredReasoner",
    "GroundedReasoner",
    "available_semantics",
    "create_reasoner",
    "AdfSatConfig",
    "ReasonerConfig",
    "SolverConfig",
    "AdfSatError",
    "UnknownArgument",
    "UseAfterClose",
    "SolverFault",
    "ProtocolError",
    "__version__",
]
