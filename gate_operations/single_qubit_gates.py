# -*- coding: utf-8 -*-

# gate_operations/single_qubit_gates.py
"""
Single-qubit gates used as building blocks of KAK decompositions and
multi-qubit compilations.

Conventions
-----------
RotateX(θ)          = exp(-i θ/2 X)
RotateY(θ)          = exp(-i θ/2 Y)
RotateZ(θ)          = exp(-i θ/2 Z)
PhaseShiftState1(θ) = diag(1, e^{iθ})
Hadamard            = (X + Z) / √2
TGate               = diag(1, e^{iπ/4})
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from typing import ClassVar, Tuple

import numpy as np

from .calculator import CalculatorFloat
from .operations import QuantumGate, Rotate, SingleQubitGateOperation

__all__ = [
    "RotateX",
    "RotateY",
    "RotateZ",
    "PhaseShiftState1",
    "Hadamard",
    "TGate",
]


@dataclass(frozen=True)
class SingleQubitRotationGate(Rotate, SingleQubitGateOperation):
    """Single-qubit gate parametrised by a rotation angle."""
    theta: CalculatorFloat

    _tag_path: ClassVar[Tuple[str, ...]] = (
        "Operation", "GateOperation", "SingleQubitGateOperation", "Rotation",
    )


@QuantumGate.register_gate("RotateX")
@dataclass(frozen=True)
class RotateX(SingleQubitRotationGate):
    """Rotation around the X axis of the Bloch sphere."""

    def unitary_matrix(self) -> np.ndarray:
        c = math.cos(self.theta.float() / 2.0)
        s = math.sin(self.theta.float() / 2.0)
        return np.array([[c, -1j * s],
                         [-1j * s, c]], dtype=complex)


@QuantumGate.register_gate("RotateY")
@dataclass(frozen=True)
class RotateY(SingleQubitRotationGate):
    """Rotation around the Y axis of the Bloch sphere."""

    def unitary_matrix(self) -> np.ndarray:
        c = math.cos(self.theta.float() / 2.0)
        s = math.sin(self.theta.float() / 2.0)
        return np.array([[c, -s],
                         [s, c]], dtype=complex)


@QuantumGate.register_gate("RotateZ")
@dataclass(frozen=True)
class RotateZ(SingleQubitRotationGate):
    """Rotation around the Z axis of the Bloch sphere."""

    def unitary_matrix(self) -> np.ndarray:
        half = self.theta.float() / 2.0
        return np.array([[cmath.exp(-1j * half), 0],
                         [0, cmath.exp(1j * half)]], dtype=complex)


@QuantumGate.register_gate("PhaseShiftState1")
@dataclass(frozen=True)
class PhaseShiftState1(SingleQubitRotationGate):
    """Phase ``e^{iθ}`` on the ``|1>`` state, identity on ``|0>``."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0],
                         [0, cmath.exp(1j * self.theta.float())]], dtype=complex)


@QuantumGate.register_gate("Hadamard")
@dataclass(frozen=True)
class Hadamard(SingleQubitGateOperation):

    def unitary_matrix(self) -> np.ndarray:
        f = 1.0 / math.sqrt(2.0)
        return np.array([[f, f],
                         [f, -f]], dtype=complex)


@QuantumGate.register_gate("TGate")
@dataclass(frozen=True)
class TGate(SingleQubitGateOperation):
    """π/8 gate ``diag(1, e^{iπ/4})``."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0],
                         [0, cmath.exp(1j * math.pi / 4.0)]], dtype=complex)
