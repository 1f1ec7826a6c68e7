# -*- coding: utf-8 -*-

import dataclasses
import warnings
import numpy as np
import pytest
from qiskit.quantum_info import Operator

from gate_operations.circuit          import Circuit
from gate_operations.decomposition    import kak_circuit, kak_matrix, kak_reconstruct, verify_kak
from gate_operations.operations       import KakDecomposition, QuantumGate, TwoQubitGateOperation
from gate_operations.utils            import random_angles
from gate_operations.two_qubit_gates  import CNOT, XY
import gate_operations  # noqa: F401  registers every gate

TWO_QUBIT_NAMES = [
    name for name in QuantumGate.names()
    if issubclass(QuantumGate.get(name), TwoQubitGateOperation)
]


def random_two_qubit_gate(name: str, control: int, target: int):
    cls = QuantumGate.get(name)
    n_params = len(dataclasses.fields(cls)) - 2
    return cls(control, target, *random_angles(n_params))


def test_catalogue_complete():
    assert len(TWO_QUBIT_NAMES) == 21


@pytest.mark.parametrize("trial", range(5))
@pytest.mark.parametrize("control,target", [(0, 1), (1, 0), (3, 5)])
@pytest.mark.parametrize("name", TWO_QUBIT_NAMES)
def test_kak_reconstruction(name, control, target, trial):
    """exp(i*phase) * A @ exp(i k.sigma) @ B reproduces the gate's unitary."""
    gate = random_two_qubit_gate(name, control, target)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert verify_kak(gate)
    assert np.allclose(kak_reconstruct(gate), gate.unitary_matrix(), atol=1e-10)


@pytest.mark.parametrize("name", TWO_QUBIT_NAMES)
def test_kak_circuits_are_local(name):
    """Correction circuits only contain single-qubit gates on the gate's qubits."""
    gate = random_two_qubit_gate(name, 2, 6)
    kak = gate.kak_decomposition()
    assert isinstance(kak, KakDecomposition)
    assert len(kak.k_vector) == 3
    for circuit in (kak.circuit_before, kak.circuit_after):
        if circuit is None:
            continue
        assert isinstance(circuit, Circuit)
        for op in circuit:
            assert len(op.involved_qubits()) == 1
            assert op.involved_qubits() <= {2, 6}


@pytest.mark.parametrize("name", TWO_QUBIT_NAMES)
def test_kak_qiskit_circuit(name):
    """RXX/RYY/RZZ expansion of the KAK record has the gate's operator, global phase included."""
    gate = random_two_qubit_gate(name, 0, 1)
    qc = kak_circuit(gate)
    assert np.allclose(Operator(qc).reverse_qargs().data, gate.unitary_matrix(), atol=1e-10)


def test_kak_matrix_of_swap_point():
    """k = (π/4, π/4, π/4) is SWAP up to the phase e^{iπ/4}."""
    U = kak_matrix((np.pi / 4,) * 3)
    assert np.allclose(np.exp(-1j * np.pi / 4) * U, np.eye(4)[[0, 2, 1, 3]])


def test_verify_kak_warns_on_broken_record():
    """A wrong record is reported through warnings."""

    @dataclasses.dataclass(frozen=True)
    class BrokenCNOT(CNOT):
        def kak_decomposition(self):
            return XY(self.control, self.target, 1.0).kak_decomposition()

    with pytest.warns(UserWarning, match="KAK reconstruction error"):
        assert not verify_kak(BrokenCNOT(0, 1))
