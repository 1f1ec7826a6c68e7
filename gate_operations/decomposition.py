# -*- coding: utf-8 -*-

# gate_operations/decomposition.py
"""
Numerical checks and expansions of the KAK decompositions carried by
two-qubit gates.

The KAK record of a gate describes

    U = exp(i*phase) * A @ exp(i*k0*XX + i*k1*YY + i*k2*ZZ) @ B

with B the unitary of ``circuit_before`` and A that of ``circuit_after``.
This module rebuilds U from the record, verifies it against the gate's
closed-form matrix and expands the record into a qiskit circuit.
"""

import numpy as np
from qiskit import QuantumCircuit
from qiskit.circuit.library import RXXGate, RYYGate, RZZGate
from typing import Optional, Sequence
import warnings
import scipy.linalg

from .calculator import CalculatorFloat

__all__ = [
    "ATOL",
    "kak_matrix",
    "kak_reconstruct",
    "verify_kak",
    "kak_circuit",
]

ATOL = 1e-10

sigma_x = np.array([[0, 1], [1, 0]], dtype=complex)
sigma_y = np.array([[0, -1j], [1j, 0]], dtype=complex)
sigma_z = np.array([[1, 0], [0, -1]], dtype=complex)

XX = np.kron(sigma_x, sigma_x)
YY = np.kron(sigma_y, sigma_y)
ZZ = np.kron(sigma_z, sigma_z)


def kak_matrix(k_vector: Sequence) -> np.ndarray:
    """
    Canonical non-local block ``exp(i*k0*XX + i*k1*YY + i*k2*ZZ)``.

    Parameters
    ----------
    k_vector : Sequence[Union[float, CalculatorFloat]]
        The three coefficients; must be concrete.

    Returns
    -------
    np.ndarray
        4x4 complex unitary.

    Raises
    ------
    ParameterError
        If a coefficient is symbolic.
    """
    a, b, c = (CalculatorFloat(k).float() for k in k_vector)
    exponent = 1j * (a * XX + b * YY + c * ZZ)
    return scipy.linalg.expm(exponent)


def kak_reconstruct(gate) -> np.ndarray:
    """
    Rebuild the 4x4 unitary of a two-qubit gate from its KAK record.

    Parameters
    ----------
    gate : TwoQubitGateOperation
        Gate with concrete parameters.

    Returns
    -------
    np.ndarray
        4x4 matrix in the |control target> basis.
    """
    kak = gate.kak_decomposition()
    qubits = (gate.control, gate.target)

    U_rec = kak_matrix(kak.k_vector)
    if kak.circuit_before is not None:
        U_rec = U_rec @ kak.circuit_before.unitary_matrix(qubits)
    if kak.circuit_after is not None:
        U_rec = kak.circuit_after.unitary_matrix(qubits) @ U_rec
    return np.exp(1j * kak.global_phase.float()) * U_rec


def verify_kak(gate, atol: float = ATOL) -> bool:
    """
    Check that the KAK record of ``gate`` reproduces ``gate.unitary_matrix()``.

    Emits a warning with the largest entry-wise error on mismatch.

    Returns
    -------
    bool
        True if all entries agree within ``atol``.
    """
    U = gate.unitary_matrix()
    U_rec = kak_reconstruct(gate)
    if not np.allclose(U_rec, U, rtol=0.0, atol=atol):
        warnings.warn(
            f"KAK reconstruction error for {gate.hqslang()}: {np.max(np.abs(U_rec - U)):.2e}"
        )
        return False
    return True


def kak_circuit(gate, num_qubits: Optional[int] = None) -> QuantumCircuit:
    """
    Expand the KAK record of a two-qubit gate into a qiskit circuit.

    The non-local block becomes ``RXX``, ``RYY`` and ``RZZ`` rotations
    (``exp(i*k*PP) = RPP(-2k)``), the correction circuits are exported with
    ``Circuit.to_qiskit`` and the KAK phase is added to the circuit's
    global phase.

    Parameters
    ----------
    gate : TwoQubitGateOperation
        Gate with concrete parameters.
    num_qubits : Optional[int]
        Register size, defaults to ``max(control, target) + 1``.

    Returns
    -------
    QuantumCircuit
        Circuit whose operator equals the gate embedded at its qubits.
    """
    if num_qubits is None:
        num_qubits = max(gate.control, gate.target) + 1
    kak = gate.kak_decomposition()
    a, b, c = (k.float() for k in kak.k_vector)

    qc = QuantumCircuit(num_qubits)
    if kak.circuit_before is not None:
        qc.compose(kak.circuit_before.to_qiskit(num_qubits), inplace=True)
    q1, q2 = gate.control, gate.target
    qc.append(RXXGate(-2 * a), [q1, q2])
    qc.append(RYYGate(-2 * b), [q1, q2])
    qc.append(RZZGate(-2 * c), [q1, q2])
    if kak.circuit_after is not None:
        qc.compose(kak.circuit_after.to_qiskit(num_qubits), inplace=True)
    qc.global_phase += kak.global_phase.float()
    return qc
