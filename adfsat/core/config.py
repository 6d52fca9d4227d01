"""
adfsat/core/config.py
=====================
Global configuration for adfsat.
All tunables in one place — validated at construction.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional


SUPPORTED_BACKENDS = frozenset({"z3"})


@dataclass
class SolverConfig:
    backend:     str           = "z3"
    timeout_ms:  Optional[int] = None   # None = unbounded, unknown → SolverFault
    random_seed: Optional[int] = None   # None = solver default

    def __post_init__(self) -> None:
        if self.backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported SAT backend '{self.backend}'. "
                f"Must be one of {sorted(SUPPORTED_BACKENDS)}."
            )
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive or None.")


@dataclass
class ReasonerConfig:
    solver:         SolverConfig  = field(default_factory=SolverConfig)
    log_candidates: bool          = False  # debug-log every generated candidate
    max_results:    Optional[int] = None   # stop after this many results

    def __post_init__(self) -> None:
        if self.max_results is not None and self.max_results < 0:
            raise ValueError("max_results must be non-negative or None.")


@dataclass
class AdfSatConfig:
    reasoner: ReasonerConfig = field(default_factory=ReasonerConfig)

    @classmethod
    def with_timeout(cls, timeout_ms: int) -> "AdfSatConfig":
        """Config whose solver calls give up after ``timeout_ms``."""
        return cls(reasoner=ReasonerConfig(solver=SolverConfig(timeout_ms=timeout_ms)))


# Singleton default config
DEFAULT_CONFIG = AdfSatConfig()
