# -*- coding: utf-8 -*-

# gate_operations/errors.py
"""
Exception hierarchy for gate operations.

Every failure raised by this package derives from ``GateOperationError``.
There are only three failure conditions:

- ``CalculatorError``: a symbolic expression could not be evaluated
  (missing variable, non-finite result, unparsable expression).
- ``ParameterError``: a concrete number was required but the parameter is
  still symbolic. It is a ``CalculatorError`` as well.
- ``QubitMappingError``: a qubit touched by an operation is absent from a
  remapping dictionary.
"""

from typing import Optional

__all__ = [
    "GateOperationError",
    "CalculatorError",
    "ParameterError",
    "QubitMappingError",
]


class GateOperationError(Exception):
    """Base class of all errors raised by gate_operations."""


class CalculatorError(GateOperationError, ValueError):
    """
    Evaluation of a scalar expression failed.

    Attributes
    ----------
    kind : str
        One of ``"missing_variable"``, ``"non_finite_result"``,
        ``"parse_error"`` or ``"symbolic_parameter"``.
    name : Optional[str]
        The missing variable or the offending expression.
    """

    def __init__(self, message: str, kind: str, name: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.name = name


class ParameterError(CalculatorError):
    """A symbolic parameter was used where a float is required."""

    def __init__(self, expression: str):
        super().__init__(
            f"Symbolic parameter '{expression}' cannot be converted to float",
            kind="symbolic_parameter",
            name=expression,
        )


class QubitMappingError(GateOperationError, LookupError):
    """
    A qubit of an operation is missing from the remapping dictionary.

    Attributes
    ----------
    missing_key : int
        The qubit index that has no image in the mapping.
    """

    def __init__(self, missing_key: int):
        super().__init__(f"Qubit {missing_key} is not part of the qubit mapping")
        self.missing_key = missing_key
