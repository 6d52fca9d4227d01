"""
adfsat/core/exceptions.py
=========================
Custom exception hierarchy for adfsat.

All exceptions carry structured context so callers can
programmatically handle different failure modes.

Unsatisfiability is never an exception: it is the normal signal that
an enumeration is exhausted.
"""

from __future__ import annotations

from typing import Optional


class AdfSatError(Exception):
    """Base exception for all adfsat errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class UnknownArgument(AdfSatError):
    """Raised when an argument outside the ADF is looked up.

    This is an integration error and is never retried.
    """

    def __init__(self, argument: object, context: Optional[dict] = None):
        super().__init__(f"Unknown argument '{argument}'.", context)
        self.argument = argument


class UseAfterClose(AdfSatError):
    """Raised when a released solver state or verifier is used again."""

    def __init__(self, resource: str, operation: str):
        super().__init__(
            f"Cannot call '{operation}' on closed {resource}.",
            context={"resource": resource, "operation": operation},
        )
        self.resource = resource
        self.operation = operation


class SolverFault(AdfSatError):
    """Raised when the underlying SAT solver fails.

    Covers resource exhaustion, internal solver errors and
    inconclusive (unknown) results. Fatal for the reasoning session.
    """

    def __init__(self, message: str, reason: str = "", context: Optional[dict] = None):
        super().__init__(message, context)
        self.reason = reason


class ProtocolError(AdfSatError):
    """Raised when a generator or verifier is used out of order,
    e.g. ``generate`` before ``prepare``."""

    pass
