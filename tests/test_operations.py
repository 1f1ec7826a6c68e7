# -*- coding: utf-8 -*-

import dataclasses
import numpy as np
import pytest

from gate_operations.calculator  import Calculator, CalculatorFloat
from gate_operations.errors      import CalculatorError, QubitMappingError
from gate_operations.operations  import QuantumGate, Rotate
from gate_operations.two_qubit_gates import (
    CNOT, SWAP, XY, ControlledPhaseShift, VariableMSXX, GivensRotation,
    GivensRotationLittleEndian, Fsim, Bogoliubov, Qsim, PMInteraction,
)
from gate_operations.multi_qubit_gates import MultiQubitMS, MultiQubitZZ, MultiCNOT

ROTATION_GATES = [
    XY(0, 1, 0.5),
    ControlledPhaseShift(0, 1, 0.5),
    VariableMSXX(0, 1, 0.5),
    GivensRotation(0, 1, 0.5, 0.2),
    GivensRotationLittleEndian(0, 1, 0.5, 0.2),
]


# ----------------------------------------------------------------------
# Registry
# ----------------------------------------------------------------------

def test_registry_lookup():
    assert QuantumGate.get("CNOT") is CNOT
    assert QuantumGate.get("MultiQubitMS") is MultiQubitMS
    assert len(QuantumGate.names()) == 30


def test_registry_unknown_gate():
    with pytest.raises(NotImplementedError):
        QuantumGate.get("Toffoli")


@pytest.mark.parametrize("name", QuantumGate.names())
def test_registered_name_is_hqslang(name):
    assert QuantumGate.get(name).__name__ == name


# ----------------------------------------------------------------------
# Tags and names
# ----------------------------------------------------------------------

@pytest.mark.parametrize("gate", ROTATION_GATES)
def test_rotation_tags(gate):
    assert gate.tags() == ("Operation", "GateOperation", "TwoQubitGateOperation",
                           "Rotation", gate.hqslang())


@pytest.mark.parametrize("gate", [CNOT(0, 1), Fsim(0, 1, 0.1, 0.2, 0.3), PMInteraction(0, 1, 0.1)])
def test_plain_two_qubit_tags(gate):
    assert gate.tags() == ("Operation", "GateOperation", "TwoQubitGateOperation", gate.hqslang())


@pytest.mark.parametrize("gate", [MultiQubitMS([0, 1], 0.1), MultiQubitZZ([0, 1], 0.1), MultiCNOT([0, 1])])
def test_multi_qubit_tags(gate):
    assert gate.tags() == ("Operation", "GateOperation", "MultiQubitGateOperation", gate.hqslang())


# ----------------------------------------------------------------------
# Equality, formatting, immutability
# ----------------------------------------------------------------------

def test_structural_equality_and_hash():
    assert XY(0, 1, 0.5) == XY(0, 1, CalculatorFloat(0.5))
    assert XY(0, 1, 0.5) != XY(1, 0, 0.5)
    assert XY(0, 1, 0.5) != ControlledPhaseShift(0, 1, 0.5)
    assert len({CNOT(0, 1), CNOT(0, 1), SWAP(0, 1)}) == 2


def test_kak_record_equal_but_unhashable():
    kak = CNOT(0, 1).kak_decomposition()
    assert kak == CNOT(0, 1).kak_decomposition()
    with pytest.raises(TypeError):
        hash(kak)


def test_debug_format():
    text = repr(Fsim(0, 1, "t", 0.5, "(2.0 * delta)"))
    assert "Fsim" in text
    assert "'t'" in text
    assert "0.5" in text
    assert "(2.0 * delta)" in text


def test_gates_are_frozen():
    gate = XY(0, 1, 0.5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        gate.theta = CalculatorFloat(1.0)


# ----------------------------------------------------------------------
# Parametrisation and substitution
# ----------------------------------------------------------------------

def test_is_parametrized():
    assert not CNOT(0, 1).is_parametrized()
    assert not Bogoliubov(0, 1, 0.1, 0.2).is_parametrized()
    assert Bogoliubov(0, 1, 0.1, "d").is_parametrized()


def test_substitute_parameters():
    gate = Qsim(0, 1, "x", 0.2, "2 * x")
    result = gate.substitute_parameters(Calculator({"x": 0.25}))
    assert result == Qsim(0, 1, 0.25, 0.2, 0.5)
    assert not result.is_parametrized()
    # receiver left untouched
    assert gate.x == "x"


def test_substitute_on_concrete_gate_is_identity():
    gate = GivensRotation(0, 1, 0.3, 0.4)
    assert gate.substitute_parameters(Calculator()) == gate


def test_substitute_missing_variable():
    with pytest.raises(CalculatorError) as info:
        Fsim(0, 1, "t", "u", 0.1).substitute_parameters(Calculator({"t": 1.0}))
    assert info.value.kind == "missing_variable"


# ----------------------------------------------------------------------
# Qubit remapping
# ----------------------------------------------------------------------

@pytest.mark.parametrize("gate", [CNOT(0, 1), Fsim(0, 1, 0.1, 0.2, 0.3), GivensRotation(0, 1, "a", "b")])
def test_remap_two_qubit(gate):
    mapping = {0: 5, 1: 3}
    remapped = gate.remap_qubits(mapping)
    assert remapped.control == 5 and remapped.target == 3
    assert remapped.involved_qubits() == {mapping[q] for q in gate.involved_qubits()}
    assert remapped.parameters() == gate.parameters()


def test_remap_partial_map_rejected():
    with pytest.raises(QubitMappingError) as info:
        CNOT(0, 1).remap_qubits({0: 2})
    assert info.value.missing_key == 1


def test_remap_ignores_unrelated_keys():
    assert CNOT(0, 1).remap_qubits({0: 1, 1: 0, 7: 8}) == CNOT(1, 0)


# ----------------------------------------------------------------------
# Rotate surface
# ----------------------------------------------------------------------

@pytest.mark.parametrize("gate", ROTATION_GATES)
@pytest.mark.parametrize("power", [2.0, 0.5, 1.0, 0.0, -2.0])
def test_powercf_scales_theta(gate, power):
    assert isinstance(gate, Rotate)
    result = gate.powercf(power)
    assert result.theta == power * gate.theta.float()
    assert type(result) is type(gate)
    assert result.control == gate.control and result.target == gate.target


@pytest.mark.parametrize("gate", ROTATION_GATES)
def test_powercf_one_is_identity(gate):
    assert gate.powercf(1) == gate


def test_powercf_leaves_phi():
    gate = GivensRotation(0, 1, 0.5, 0.2).powercf(3.0)
    assert gate.phi == 0.2
    assert gate.theta == 1.5


def test_powercf_symbolic():
    assert XY(0, 1, "theta").powercf(2).theta == "(2.0 * theta)"
    assert XY(0, 1, 0.5).powercf("power").theta == "(power * 0.5)"


def test_overrotate():
    gate = XY(0, 1, 0.5)
    rng = np.random.default_rng(7)
    expected = 0.5 + 0.1 * np.random.default_rng(7).normal(0.0, 1.0)
    result = gate.overrotate(0.1, 1.0, rng=rng)
    assert np.isclose(result.theta.float(), expected)
    assert gate.overrotate(0.0, 1.0) == gate
