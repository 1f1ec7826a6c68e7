# -*- coding: utf-8 -*-

# gate_operations/circuit.py
"""
Ordered sequence of gate operations.

A Circuit is what KAK decompositions and multi-qubit compilations return.
It can be composed into a dense unitary (first listed qubit most
significant) and exported to a qiskit ``QuantumCircuit``.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence

import numpy as np
from qiskit import QuantumCircuit
from qiskit.circuit.library import UnitaryGate

from .errors import QubitMappingError
from .utils  import apply_to_qubits

__all__ = ["Circuit"]

# hqslang name -> QuantumCircuit method taking (theta, *qubits)
_QISKIT_ROTATIONS = {
    "RotateX":              "rx",
    "RotateY":              "ry",
    "RotateZ":              "rz",
    "PhaseShiftState1":     "p",
    "ControlledPhaseShift": "cp",
}

# hqslang name -> QuantumCircuit method taking (*qubits)
_QISKIT_FIXED = {
    "Hadamard":         "h",
    "TGate":            "t",
    "CNOT":             "cx",
    "ControlledPauliY": "cy",
    "ControlledPauliZ": "cz",
    "SWAP":             "swap",
    "ISwap":            "iswap",
}


class Circuit:
    """
    Append-only list of operations.

    Parameters
    ----------
    operations : Optional[Iterable[Operation]]
        Initial operations in time order.

    Examples
    --------
    >>> c = Circuit()
    >>> c += Hadamard(0)
    >>> c += CNOT(0, 1)
    >>> len(c)
    2
    """

    def __init__(self, operations: Optional[Iterable] = None):
        self._operations: List = list(operations) if operations is not None else []

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def add(self, operation) -> "Circuit":
        """Append one operation and return the circuit."""
        self._operations.append(operation)
        return self

    def __iadd__(self, other) -> "Circuit":
        if isinstance(other, Circuit):
            self._operations.extend(other._operations)
        else:
            self._operations.append(other)
        return self

    def __add__(self, other) -> "Circuit":
        new = Circuit(self._operations)
        new += other
        return new

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator:
        return iter(self._operations)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Circuit(self._operations[index])
        return self._operations[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return self._operations == other._operations

    def __repr__(self) -> str:
        return f"Circuit({self._operations!r})"

    # ------------------------------------------------------------------
    # Operation-like surface
    # ------------------------------------------------------------------

    def involved_qubits(self) -> FrozenSet[int]:
        qubits = set()
        for op in self._operations:
            qubits |= op.involved_qubits()
        return frozenset(qubits)

    def is_parametrized(self) -> bool:
        return any(op.is_parametrized() for op in self._operations)

    def substitute_parameters(self, calculator) -> "Circuit":
        return Circuit(op.substitute_parameters(calculator) for op in self._operations)

    def remap_qubits(self, mapping: Mapping[int, int]) -> "Circuit":
        return Circuit(op.remap_qubits(mapping) for op in self._operations)

    # ------------------------------------------------------------------
    # Dense composition and export
    # ------------------------------------------------------------------

    def unitary_matrix(self, qubits: Optional[Sequence[int]] = None) -> np.ndarray:
        """
        Dense unitary of the whole circuit.

        Parameters
        ----------
        qubits : Optional[Sequence[int]]
            Register order, first qubit most significant. Defaults to the
            sorted involved qubits.

        Returns
        -------
        np.ndarray
            ``2**n x 2**n`` complex matrix, later operations multiplied
            from the left.

        Raises
        ------
        QubitMappingError
            If an operation acts on a qubit outside ``qubits``.
        ParameterError
            If an operation is still symbolic.
        """
        if qubits is None:
            qubits = sorted(self.involved_qubits())
        position = {q: i for i, q in enumerate(qubits)}
        n = len(position)
        matrix = np.eye(2 ** n, dtype=complex)
        for op in self._operations:
            try:
                positions = [position[q] for q in op.matrix_qubits()]
            except KeyError as err:
                raise QubitMappingError(err.args[0]) from None
            matrix = apply_to_qubits(matrix, op.unitary_matrix(), positions, n)
        return matrix

    def to_qiskit(self, num_qubits: Optional[int] = None) -> QuantumCircuit:
        """
        Convert to a qiskit ``QuantumCircuit``.

        Native gates map to the matching qiskit instruction, every other
        gate becomes a ``UnitaryGate`` on the reversed qubit list so that
        qiskit's little-endian ordering reproduces ``unitary_matrix()``.

        Parameters
        ----------
        num_qubits : Optional[int]
            Register size, defaults to ``max(involved_qubits()) + 1``.

        Raises
        ------
        ParameterError
            If an operation is still symbolic.
        """
        if num_qubits is None:
            involved = self.involved_qubits()
            num_qubits = max(involved) + 1 if involved else 0
        qc = QuantumCircuit(num_qubits)
        for op in self._operations:
            name = op.hqslang()
            qargs = list(op.matrix_qubits())
            if name in _QISKIT_ROTATIONS:
                getattr(qc, _QISKIT_ROTATIONS[name])(op.theta.float(), *qargs)
            elif name in _QISKIT_FIXED:
                getattr(qc, _QISKIT_FIXED[name])(*qargs)
            else:
                qc.append(UnitaryGate(op.unitary_matrix(), label=name), qargs[::-1])
        return qc
