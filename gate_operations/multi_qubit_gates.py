# -*- coding: utf-8 -*-

# gate_operations/multi_qubit_gates.py
"""
Gates acting on an arbitrary ordered list of qubits.

They offer no KAK decomposition; ``circuit()`` compiles them into the
single- and two-qubit gates of this package instead. The first qubit of
``qubits`` is the most significant bit of ``unitary_matrix()``.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .calculator          import CalculatorFloat
from .circuit             import Circuit
from .operations          import MultiQubitGateOperation, QuantumGate, Rotate
from .single_qubit_gates  import Hadamard, PhaseShiftState1, RotateZ, TGate
from .two_qubit_gates     import CNOT

__all__ = [
    "MultiQubitMS",
    "MultiQubitZZ",
    "MultiCNOT",
]


def _cnot_ladder(qubits: Sequence[int]) -> Circuit:
    """CNOT(q0, q1), CNOT(q1, q2), ...; leaves the parity of all qubits on the last one."""
    return Circuit(CNOT(a, b) for a, b in zip(qubits[:-1], qubits[1:]))


def _reversed_cnot_ladder(qubits: Sequence[int]) -> Circuit:
    return Circuit(CNOT(a, b) for a, b in reversed(list(zip(qubits[:-1], qubits[1:]))))


def _parity_count(dim: int) -> np.ndarray:
    return np.array([bin(i).count("1") & 1 for i in range(dim)])


@QuantumGate.register_gate("MultiQubitMS")
@dataclass(frozen=True)
class MultiQubitMS(Rotate, MultiQubitGateOperation):
    """
    Multi-qubit Mølmer-Sørensen gate ``exp(-i θ/2 X⊗X⊗...⊗X)``.

    Parameters
    ----------
    qubits : Sequence[int]
        Ordered qubits, first one most significant.
    theta : CalculatorFloat
        Rotation angle.

    Notes
    -----
    ``circuit()`` uses ``RotateZ(last, θ/2)`` on the collected parity, which
    realises ``exp(-i θ/4 X⊗...⊗X)``; the compilation of ``gate`` therefore
    matches ``gate.powercf(0.5).unitary_matrix()``.
    """
    theta: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        dim = 2 ** len(self.qubits)
        c = math.cos(self.theta.float() / 2.0)
        s = math.sin(self.theta.float() / 2.0)
        # X⊗...⊗X maps |i> to |dim-1-i>
        return c * np.eye(dim, dtype=complex) - 1j * s * np.fliplr(np.eye(dim, dtype=complex))

    def circuit(self) -> Circuit:
        circuit = Circuit(Hadamard(q) for q in self.qubits)
        circuit += _cnot_ladder(self.qubits)
        circuit += RotateZ(self.qubits[-1], self.theta / 2.0)
        circuit += _reversed_cnot_ladder(self.qubits)
        circuit += Circuit(Hadamard(q) for q in self.qubits)
        return circuit


@QuantumGate.register_gate("MultiQubitZZ")
@dataclass(frozen=True)
class MultiQubitZZ(Rotate, MultiQubitGateOperation):
    """
    Multi-qubit ZZ gate ``exp(-i θ/2 Z⊗Z⊗...⊗Z)``.

    Diagonal with ``e^{-iθ/2}`` on even-parity basis states and
    ``e^{iθ/2}`` on odd ones. Compiled like MultiQubitMS without the
    Hadamard layers.
    """
    theta: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        dim = 2 ** len(self.qubits)
        signs = 1 - 2 * _parity_count(dim)
        return np.diag(np.exp(-0.5j * self.theta.float() * signs))

    def circuit(self) -> Circuit:
        circuit = _cnot_ladder(self.qubits)
        circuit += RotateZ(self.qubits[-1], self.theta / 2.0)
        circuit += _reversed_cnot_ladder(self.qubits)
        return circuit


@QuantumGate.register_gate("MultiCNOT")
@dataclass(frozen=True)
class MultiCNOT(MultiQubitGateOperation):
    """
    Multi-controlled NOT: the last qubit is flipped if all others are |1>.

    The unitary is the identity with the last two basis states exchanged.
    """

    def unitary_matrix(self) -> np.ndarray:
        dim = 2 ** len(self.qubits)
        matrix = np.eye(dim, dtype=complex)
        matrix[[dim - 2, dim - 1]] = matrix[[dim - 1, dim - 2]]
        return matrix

    def circuit(self) -> Circuit:
        """
        Compile into Hadamard, T, PhaseShiftState1 and CNOT gates.

        Two qubits give a single CNOT and three qubits the standard
        15-gate Toffoli circuit. Larger gates conjugate a multi-controlled Z
        with Hadamards on the target; the multi-controlled Z is a product of
        phase gadgets, one per non-empty subset S of the qubits, each
        applying ``PhaseShiftState1(π (-1)^(|S|+1) / 2^(n-1))`` to the
        parity of S.
        """
        if len(self.qubits) == 2:
            return Circuit([CNOT(*self.qubits)])
        if len(self.qubits) == 3:
            return _toffoli(*self.qubits)

        n = len(self.qubits)
        target = self.qubits[-1]
        circuit = Circuit([Hadamard(target)])
        for size in range(1, n + 1):
            angle = CalculatorFloat((-1) ** (size + 1) * math.pi / 2 ** (n - 1))
            for subset in itertools.combinations(self.qubits, size):
                circuit += _cnot_ladder(subset)
                circuit += PhaseShiftState1(subset[-1], angle)
                circuit += _reversed_cnot_ladder(subset)
        circuit += Hadamard(target)
        return circuit


def _toffoli(c0: int, c1: int, target: int) -> Circuit:
    minus_pi_4 = -CalculatorFloat.FRAC_PI_4
    return Circuit([
        Hadamard(target),
        CNOT(c1, target),
        PhaseShiftState1(target, minus_pi_4),
        CNOT(c0, target),
        TGate(target),
        CNOT(c1, target),
        PhaseShiftState1(target, minus_pi_4),
        CNOT(c0, target),
        TGate(c1),
        TGate(target),
        Hadamard(target),
        CNOT(c0, c1),
        TGate(c0),
        PhaseShiftState1(c1, minus_pi_4),
        CNOT(c0, c1),
    ])
