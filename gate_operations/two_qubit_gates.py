# -*- coding: utf-8 -*-

# gate_operations/two_qubit_gates.py
"""
Two-qubit gate catalogue.

Every gate carries its closed-form 4x4 unitary and a KAK decomposition

    U = exp(i * phase) · A · exp(i (k0 XX + k1 YY + k2 ZZ)) · B

with single-qubit correction circuits B (before) and A (after). The basis
order is |control target> with control as the most significant bit.

KAK records are built from the CalculatorFloat parameters directly, so a
symbolic gate yields a symbolic decomposition; only ``unitary_matrix()``
needs concrete parameters.
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from typing import ClassVar, Tuple

import numpy as np

from .calculator          import CalculatorComplex, CalculatorFloat
from .circuit             import Circuit
from .operations          import KakDecomposition, QuantumGate, Rotate, TwoQubitGateOperation
from .single_qubit_gates  import RotateX, RotateY, RotateZ

__all__ = [
    "CNOT",
    "SWAP",
    "ISwap",
    "FSwap",
    "SqrtISwap",
    "InvSqrtISwap",
    "XY",
    "ControlledPhaseShift",
    "ControlledPauliY",
    "ControlledPauliZ",
    "MolmerSorensenXX",
    "VariableMSXX",
    "GivensRotation",
    "GivensRotationLittleEndian",
    "Qsim",
    "Fsim",
    "SpinInteraction",
    "Bogoliubov",
    "PMInteraction",
    "ComplexPMInteraction",
    "PhaseShiftedControlledZ",
]

_F = 1.0 / math.sqrt(2.0)
_PI_8 = CalculatorFloat(math.pi / 8.0)
_ZERO = CalculatorFloat.ZERO
_PI_4 = CalculatorFloat.FRAC_PI_4
_PI_2 = CalculatorFloat.FRAC_PI_2


@dataclass(frozen=True)
class TwoQubitRotationGate(Rotate, TwoQubitGateOperation):
    """Two-qubit gate with a rotation angle ``theta``; tagged ``"Rotation"``."""
    theta: CalculatorFloat

    _tag_path: ClassVar[Tuple[str, ...]] = (
        "Operation", "GateOperation", "TwoQubitGateOperation", "Rotation",
    )


# ----------------------------------------------------------------------
# Fixed gates
# ----------------------------------------------------------------------

@QuantumGate.register_gate("CNOT")
@dataclass(frozen=True)
class CNOT(TwoQubitGateOperation):
    """Controlled NOT: flips ``target`` if ``control`` is |1>."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, 1, 0, 0],
                         [0, 0, 0, 1],
                         [0, 0, 1, 0]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([
            RotateZ(self.control, _PI_2),
            RotateY(self.control, _PI_2),
            RotateX(self.target, _PI_2),
        ])
        after = Circuit([RotateY(self.control, -_PI_2)])
        return KakDecomposition(_PI_4, (_PI_4, _ZERO, _ZERO), before, after)


@QuantumGate.register_gate("SWAP")
@dataclass(frozen=True)
class SWAP(TwoQubitGateOperation):
    """Exchanges the states of the two qubits."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, 0, 1, 0],
                         [0, 1, 0, 0],
                         [0, 0, 0, 1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(-_PI_4, (_PI_4, _PI_4, _PI_4))


@QuantumGate.register_gate("ISwap")
@dataclass(frozen=True)
class ISwap(TwoQubitGateOperation):
    """SWAP with a phase ``i`` on the exchanged states."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, 0, 1j, 0],
                         [0, 1j, 0, 0],
                         [0, 0, 0, 1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(_ZERO, (_PI_4, _PI_4, _ZERO))


@QuantumGate.register_gate("FSwap")
@dataclass(frozen=True)
class FSwap(TwoQubitGateOperation):
    """Fermionic SWAP: a SWAP with sign ``-1`` on |11>."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, 0, 1, 0],
                         [0, 1, 0, 0],
                         [0, 0, 0, -1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([
            RotateZ(self.control, -_PI_2),
            RotateZ(self.target, -_PI_2),
        ])
        return KakDecomposition(-_PI_2, (_PI_4, _PI_4, _ZERO), before)


@QuantumGate.register_gate("SqrtISwap")
@dataclass(frozen=True)
class SqrtISwap(TwoQubitGateOperation):
    """Square root of ISwap."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, _F, 1j * _F, 0],
                         [0, 1j * _F, _F, 0],
                         [0, 0, 0, 1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(_ZERO, (_PI_8, _PI_8, _ZERO))


@QuantumGate.register_gate("InvSqrtISwap")
@dataclass(frozen=True)
class InvSqrtISwap(TwoQubitGateOperation):
    """Inverse square root of ISwap."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, _F, -1j * _F, 0],
                         [0, -1j * _F, _F, 0],
                         [0, 0, 0, 1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(_ZERO, (-_PI_8, -_PI_8, _ZERO))


@QuantumGate.register_gate("ControlledPauliY")
@dataclass(frozen=True)
class ControlledPauliY(TwoQubitGateOperation):
    """Applies Pauli Y on ``target`` if ``control`` is |1>."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[1, 0, 0, 0],
                         [0, 1, 0, 0],
                         [0, 0, 0, -1j],
                         [0, 0, 1j, 0]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([
            RotateZ(self.control, _PI_2),
            RotateY(self.target, _PI_2),
            RotateX(self.target, _PI_2),
        ])
        after = Circuit([RotateX(self.target, -_PI_2)])
        return KakDecomposition(_PI_4, (_ZERO, _ZERO, _PI_4), before, after)


@QuantumGate.register_gate("ControlledPauliZ")
@dataclass(frozen=True)
class ControlledPauliZ(TwoQubitGateOperation):
    """Applies Pauli Z on ``target`` if ``control`` is |1>."""

    def unitary_matrix(self) -> np.ndarray:
        return np.diag([1, 1, 1, -1]).astype(complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([
            RotateZ(self.control, _PI_2),
            RotateZ(self.target, _PI_2),
        ])
        return KakDecomposition(_PI_4, (_ZERO, _ZERO, _PI_4), before)


@QuantumGate.register_gate("MolmerSorensenXX")
@dataclass(frozen=True)
class MolmerSorensenXX(TwoQubitGateOperation):
    """Fixed Mølmer-Sørensen gate ``exp(-i π/4 XX)``; symmetric in its qubits."""

    def unitary_matrix(self) -> np.ndarray:
        return np.array([[_F, 0, 0, -1j * _F],
                         [0, _F, -1j * _F, 0],
                         [0, -1j * _F, _F, 0],
                         [-1j * _F, 0, 0, _F]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(_ZERO, (-_PI_4, _ZERO, _ZERO))


# ----------------------------------------------------------------------
# Rotation gates
# ----------------------------------------------------------------------

@QuantumGate.register_gate("XY")
@dataclass(frozen=True)
class XY(TwoQubitRotationGate):
    """
    XY interaction ``exp(i θ/4 (XX + YY))``.

    Acts as a rotation by θ/2 in the {|01>, |10>} subspace.
    """

    def unitary_matrix(self) -> np.ndarray:
        c = math.cos(self.theta.float() / 2.0)
        s = math.sin(self.theta.float() / 2.0)
        return np.array([[1, 0, 0, 0],
                         [0, c, 1j * s, 0],
                         [0, 1j * s, c, 0],
                         [0, 0, 0, 1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        k = self.theta / 4.0
        return KakDecomposition(_ZERO, (k, k, _ZERO))


@QuantumGate.register_gate("ControlledPhaseShift")
@dataclass(frozen=True)
class ControlledPhaseShift(TwoQubitRotationGate):
    """Phase ``e^{iθ}`` on |11>."""

    def unitary_matrix(self) -> np.ndarray:
        return np.diag([1, 1, 1, cmath.exp(1j * self.theta.float())]).astype(complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([
            RotateZ(self.control, self.theta / 2.0),
            RotateZ(self.target, self.theta / 2.0),
        ])
        return KakDecomposition(self.theta / 4.0, (_ZERO, _ZERO, self.theta / 4.0), before)


@QuantumGate.register_gate("VariableMSXX")
@dataclass(frozen=True)
class VariableMSXX(TwoQubitRotationGate):
    """Mølmer-Sørensen gate with variable angle, ``exp(-i θ/2 XX)``."""

    def unitary_matrix(self) -> np.ndarray:
        c = math.cos(self.theta.float() / 2.0)
        s = math.sin(self.theta.float() / 2.0)
        return np.array([[c, 0, 0, -1j * s],
                         [0, c, -1j * s, 0],
                         [0, -1j * s, c, 0],
                         [-1j * s, 0, 0, c]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(_ZERO, (self.theta / (-2.0), _ZERO, _ZERO))


@QuantumGate.register_gate("GivensRotation")
@dataclass(frozen=True)
class GivensRotation(TwoQubitRotationGate):
    """
    Givens rotation by θ in the {|01>, |10>} subspace, big-endian.

    Parameters
    ----------
    control, target : int
        Qubits; ``control`` is the most significant bit.
    theta : CalculatorFloat
        Rotation angle.
    phi : CalculatorFloat
        Phase attached to |01> and |11>.
    """
    phi: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        ct = math.cos(self.theta.float())
        st = math.sin(self.theta.float())
        ep = cmath.exp(1j * self.phi.float())
        return np.array([[1, 0, 0, 0],
                         [0, ct * ep, st, 0],
                         [0, -st * ep, ct, 0],
                         [0, 0, 0, ep]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([RotateZ(self.target, self.phi + math.pi / 2.0)])
        after = Circuit([RotateZ(self.target, -_PI_2)])
        k = self.theta / 2.0
        return KakDecomposition(self.phi / 2.0, (k, k, _ZERO), before, after)


@QuantumGate.register_gate("GivensRotationLittleEndian")
@dataclass(frozen=True)
class GivensRotationLittleEndian(TwoQubitRotationGate):
    """Givens rotation with the phase on the |10> row, little-endian variant."""
    phi: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        ct = math.cos(self.theta.float())
        st = math.sin(self.theta.float())
        ep = cmath.exp(1j * self.phi.float())
        return np.array([[1, 0, 0, 0],
                         [0, ct, st, 0],
                         [0, -st * ep, ct * ep, 0],
                         [0, 0, 0, ep]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([RotateZ(self.control, -_PI_2)])
        after = Circuit([RotateZ(self.control, self.phi + math.pi / 2.0)])
        k = self.theta / 2.0
        return KakDecomposition(self.phi / 2.0, (k, k, _ZERO), before, after)


# ----------------------------------------------------------------------
# Parametrised interactions
# ----------------------------------------------------------------------

def _spin_block(x: float, y: float, z: float) -> np.ndarray:
    """Unitary ``exp(-i (x XX + y YY + z ZZ))``."""
    cm, sm = math.cos(x - y), math.sin(x - y)
    cp, sp = math.cos(x + y), math.sin(x + y)
    ez = cmath.exp(1j * z)
    emz = cmath.exp(-1j * z)
    return np.array([[cm * emz, 0, 0, -1j * sm * emz],
                     [0, cp * ez, -1j * sp * ez, 0],
                     [0, -1j * sp * ez, cp * ez, 0],
                     [-1j * sm * emz, 0, 0, cm * emz]], dtype=complex)


@QuantumGate.register_gate("SpinInteraction")
@dataclass(frozen=True)
class SpinInteraction(TwoQubitGateOperation):
    """Generalised spin interaction ``exp(-i (x XX + y YY + z ZZ))``."""
    x: CalculatorFloat
    y: CalculatorFloat
    z: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        return _spin_block(self.x.float(), self.y.float(), self.z.float())

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(_ZERO, (-self.x, -self.y, -self.z))


@QuantumGate.register_gate("Qsim")
@dataclass(frozen=True)
class Qsim(TwoQubitGateOperation):
    """
    Qsim gate: a SpinInteraction followed by a SWAP of its middle rows.

    Notes
    -----
    Rows |01> and |10> of ``SpinInteraction(x, y, z)`` are exchanged.
    """
    x: CalculatorFloat
    y: CalculatorFloat
    z: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        return _spin_block(self.x.float(), self.y.float(), self.z.float())[[0, 2, 1, 3]]

    def kak_decomposition(self) -> KakDecomposition:
        return KakDecomposition(
            -_PI_4,
            (-self.x + math.pi / 4.0, -self.y + math.pi / 4.0, -self.z + math.pi / 4.0),
        )


@QuantumGate.register_gate("Fsim")
@dataclass(frozen=True)
class Fsim(TwoQubitGateOperation):
    """
    Fermionic simulation gate.

    Parameters
    ----------
    t : CalculatorFloat
        Hopping angle in the {|01>, |10>} subspace.
    u : CalculatorFloat
        Interaction phase on |11>.
    delta : CalculatorFloat
        Pairing angle coupling |00> and |11>.
    """
    t: CalculatorFloat
    u: CalculatorFloat
    delta: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        t, u, d = self.t.float(), self.u.float(), self.delta.float()
        emu = cmath.exp(-1j * u)
        return np.array([[math.cos(d), 0, 0, 1j * math.sin(d)],
                         [0, -1j * math.sin(t), math.cos(t), 0],
                         [0, math.cos(t), -1j * math.sin(t), 0],
                         [-1j * math.sin(d) * emu, 0, 0, -math.cos(d) * emu]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        theta = self.u / (-2.0) - math.pi / 2.0
        after = Circuit([
            RotateZ(self.control, theta),
            RotateZ(self.target, theta),
        ])
        k_vector = (
            self.t / (-2.0) + self.delta / 2.0 + math.pi / 4.0,
            self.t / (-2.0) - self.delta / 2.0 + math.pi / 4.0,
            self.u / (-4.0),
        )
        return KakDecomposition(self.u / (-4.0) - math.pi / 2.0, k_vector, None, after)


@QuantumGate.register_gate("Bogoliubov")
@dataclass(frozen=True)
class Bogoliubov(TwoQubitGateOperation):
    """
    Bogoliubov pairing term coupling |00> and |11> with amplitude Δ.

    ``Δ = delta_real + i delta_imag``.
    """
    delta_real: CalculatorFloat
    delta_imag: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        delta = complex(self.delta_real.float(), self.delta_imag.float())
        da, dp = abs(delta), cmath.phase(delta)
        return np.array([[math.cos(da), 0, 0, 1j * math.sin(da) * cmath.exp(1j * dp)],
                         [0, 1, 0, 0],
                         [0, 0, 1, 0],
                         [1j * math.sin(da) * cmath.exp(-1j * dp), 0, 0, math.cos(da)]],
                        dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        delta = CalculatorComplex(self.delta_real, self.delta_imag)
        before = Circuit([RotateZ(self.target, delta.arg())])
        after = Circuit([RotateZ(self.target, -delta.arg())])
        k_vector = (delta.norm() / 2.0, delta.norm() / (-2.0), _ZERO)
        return KakDecomposition(_ZERO, k_vector, before, after)


@QuantumGate.register_gate("PMInteraction")
@dataclass(frozen=True)
class PMInteraction(TwoQubitGateOperation):
    """Transverse exchange ``exp(-i t (σ+σ- + σ-σ+))``."""
    t: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        c = math.cos(self.t.float())
        s = math.sin(self.t.float())
        return np.array([[1, 0, 0, 0],
                         [0, c, -1j * s, 0],
                         [0, -1j * s, c, 0],
                         [0, 0, 0, 1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        k = self.t / (-2.0)
        return KakDecomposition(_ZERO, (k, k, _ZERO))


@QuantumGate.register_gate("ComplexPMInteraction")
@dataclass(frozen=True)
class ComplexPMInteraction(TwoQubitGateOperation):
    """PMInteraction with a complex coupling ``t = t_real + i t_imag``."""
    t_real: CalculatorFloat
    t_imag: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        t = complex(self.t_real.float(), self.t_imag.float())
        tn, ta = abs(t), cmath.phase(t)
        c, s = math.cos(tn), math.sin(tn)
        return np.array([[1, 0, 0, 0],
                         [0, c, -1j * s * cmath.exp(-1j * ta), 0],
                         [0, -1j * s * cmath.exp(1j * ta), c, 0],
                         [0, 0, 0, 1]], dtype=complex)

    def kak_decomposition(self) -> KakDecomposition:
        t = CalculatorComplex(self.t_real, self.t_imag)
        before = Circuit([RotateZ(self.target, t.arg())])
        after = Circuit([RotateZ(self.target, -t.arg())])
        k = t.norm() / (-2.0)
        return KakDecomposition(_ZERO, (k, k, _ZERO), before, after)


@QuantumGate.register_gate("PhaseShiftedControlledZ")
@dataclass(frozen=True)
class PhaseShiftedControlledZ(TwoQubitGateOperation):
    """ControlledPauliZ with single-qubit phases φ on both qubits."""
    phi: CalculatorFloat

    def unitary_matrix(self) -> np.ndarray:
        phi = self.phi.float()
        ep = cmath.exp(1j * phi)
        return np.diag([1, ep, ep, cmath.exp(1j * (2.0 * phi - math.pi))]).astype(complex)

    def kak_decomposition(self) -> KakDecomposition:
        before = Circuit([
            RotateZ(self.control, _PI_2),
            RotateZ(self.target, _PI_2),
        ])
        after = Circuit([
            RotateZ(self.control, self.phi),
            RotateZ(self.target, self.phi),
        ])
        return KakDecomposition(_PI_4 + self.phi, (_ZERO, _ZERO, _PI_4), before, after)
