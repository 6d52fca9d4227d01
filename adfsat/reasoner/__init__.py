"""adfsat/reasoner — Generate-and-verify reasoning over SAT."""

from adfsat.reasoner.generator import (
    CandidateGenerator,
    CompleteCandidateGenerator,
    ConflictFreeGenerator,
    GeneratorState,
    ModelGenerator,
)
from adfsat.reasoner.reasoner import (
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
    register_semantics,
)
from adfsat.reasoner.verifier import (
    AdmissibleVerifier,
    CompleteVerifier,
    MaximalityVerifier,
    ModelVerifier,
    StableVerifier,
    Verifier,
)

__all__ = [
    "CandidateGenerator",
    "CompleteCandidateGenerator",
    "ConflictFreeGenerator",
    "GeneratorState",
    "ModelGenerator",
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
    "register_semantics",
    "Verifier",
    "AdmissibleVerifier",
    "CompleteVerifier",
    "MaximalityVerifier",
    "ModelVerifier",
    "StableVerifier",
]
