# -*- coding: utf-8 -*-

# gate_operations/__init__.py
"""
Gate Operations Package

Two-qubit and multi-qubit quantum gates with symbolic parameters, closed-form
unitaries, KAK decompositions and compilation into elementary gates.
"""

from .errors      import (
    GateOperationError,
    CalculatorError,
    ParameterError,
    QubitMappingError,
)
from .calculator  import CalculatorFloat, CalculatorComplex, Calculator
from .circuit     import Circuit
from .operations  import (
    QuantumGate,
    Operation,
    GateOperation,
    Rotate,
    SingleQubitGateOperation,
    TwoQubitGateOperation,
    MultiQubitGateOperation,
    KakDecomposition,
)
from .single_qubit_gates import (
    RotateX,
    RotateY,
    RotateZ,
    PhaseShiftState1,
    Hadamard,
    TGate,
)
from .two_qubit_gates import (
    CNOT,
    SWAP,
    ISwap,
    FSwap,
    SqrtISwap,
    InvSqrtISwap,
    XY,
    ControlledPhaseShift,
    ControlledPauliY,
    ControlledPauliZ,
    MolmerSorensenXX,
    VariableMSXX,
    GivensRotation,
    GivensRotationLittleEndian,
    Qsim,
    Fsim,
    SpinInteraction,
    Bogoliubov,
    PMInteraction,
    ComplexPMInteraction,
    PhaseShiftedControlledZ,
)
from .multi_qubit_gates import MultiQubitMS, MultiQubitZZ, MultiCNOT
from .decomposition import ATOL, kak_matrix, kak_reconstruct, verify_kak, kak_circuit
from .utils       import apply_to_qubits, embed_gate, is_unitary, random_angles

__all__ = [
    "GateOperationError",
    "CalculatorError",
    "ParameterError",
    "QubitMappingError",
    "CalculatorFloat",
    "CalculatorComplex",
    "Calculator",
    "Circuit",
    "QuantumGate",
    "Operation",
    "GateOperation",
    "Rotate",
    "SingleQubitGateOperation",
    "TwoQubitGateOperation",
    "MultiQubitGateOperation",
    "KakDecomposition",
    "RotateX",
    "RotateY",
    "RotateZ",
    "PhaseShiftState1",
    "Hadamard",
    "TGate",
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
    "MultiQubitMS",
    "MultiQubitZZ",
    "MultiCNOT",
    "ATOL",
    "kak_matrix",
    "kak_reconstruct",
    "verify_kak",
    "kak_circuit",
    "apply_to_qubits",
    "embed_gate",
    "is_unitary",
    "random_angles",
]

# Version
__version__ = "0.1.0"
