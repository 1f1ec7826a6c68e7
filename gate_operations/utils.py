# -*- coding: utf-8 -*-

# gate_operations/utils.py
from __future__ import annotations
import numpy as np
from typing import Optional, Sequence
__all__ = [
    "apply_to_qubits",
    "embed_gate",
    "is_unitary",
    "random_angles",
]


def apply_to_qubits(operator: np.ndarray, gate_matrix: np.ndarray,
                    positions: Sequence[int], n: int) -> np.ndarray:
    """
    Left-multiply a 2^n x 2^n operator by a k-qubit gate acting on ``positions``.

    Parameters
    ----------
    operator : np.ndarray
        Full ``2**n x 2**n`` operator; position 0 is the most significant qubit.
    gate_matrix : np.ndarray
        ``2**k x 2**k`` gate; its first qubit is its most significant bit.
    positions : Sequence[int]
        Position of each gate qubit inside the n-qubit register.
    n : int
        Number of qubits of ``operator``.

    Returns
    -------
    np.ndarray
        ``G_embedded @ operator`` without building the embedded gate.

    Notes
    -----
    The operator is viewed as a rank-(n+1) tensor, the gate's input legs are
    contracted with the addressed legs and the output legs are moved back in
    place.
    """
    k = len(positions)
    if len(set(positions)) != k:
        raise ValueError(f"Repeated qubit positions {list(positions)}")
    dim = 2 ** n
    tensor = operator.reshape([2] * n + [dim])
    gate = gate_matrix.reshape([2] * (2 * k))
    # contract gate inputs (axes k..2k-1) with register legs
    out = np.tensordot(gate, tensor, axes=(list(range(k, 2 * k)), list(positions)))
    out = np.moveaxis(out, list(range(k)), list(positions))
    return out.reshape(dim, dim)


def embed_gate(gate_matrix: np.ndarray, positions: Sequence[int], n: int) -> np.ndarray:
    """Full ``2**n x 2**n`` matrix of a gate acting on ``positions``."""
    return apply_to_qubits(np.eye(2 ** n, dtype=complex), gate_matrix, positions, n)


def is_unitary(matrix: np.ndarray, atol: float = 1e-10) -> bool:
    """True if ``matrix`` is square and ``U^† U = 1`` within ``atol``."""
    matrix = np.asarray(matrix)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    return np.allclose(matrix.conj().T @ matrix, np.eye(matrix.shape[0]), rtol=0.0, atol=atol)


def random_angles(count: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Draw ``count`` angles uniformly from [-2π, 2π).

    Uses the global numpy random state unless a generator is given.
    """
    if rng is None:
        return np.random.uniform(-2 * np.pi, 2 * np.pi, size=count)
    return rng.uniform(-2 * np.pi, 2 * np.pi, size=count)
