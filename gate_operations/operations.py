# -*- coding: utf-8 -*-

# gate_operations/operations.py
"""
Capability surface shared by every gate operation.

All gates are frozen dataclasses. Structural equality, hashing and a
``repr`` containing the gate name and every parameter come from the
dataclass machinery; the generic parts of the surface (parametrisation
predicate, substitution, qubit remapping) are implemented once here by
walking the dataclass fields.

The gates are registered in the QuantumGate class registry and can be
looked up by their hqslang name.

Class hierarchy
---------------
Operation
  GateOperation                        adds unitary_matrix()
    SingleQubitGateOperation           qubit
    TwoQubitGateOperation              control, target, kak_decomposition()
    MultiQubitGateOperation            qubits, circuit()
Rotate (mixin)                         theta, powercf(), overrotate()
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, FrozenSet, List, Mapping, Optional, Tuple

import numpy as np

from .calculator import Calculator, CalculatorFloat
from .circuit    import Circuit
from .errors     import QubitMappingError

__all__ = [
    "QuantumGate",
    "Operation",
    "GateOperation",
    "Rotate",
    "SingleQubitGateOperation",
    "TwoQubitGateOperation",
    "MultiQubitGateOperation",
    "KakDecomposition",
]

_PARAMETER_TYPES = ("CalculatorFloat", CalculatorFloat)


class QuantumGate:
    """
    Registry for gate operation classes.

    Maintains a mapping from hqslang names to gate classes so that gates
    can be built by name.

    Attributes
    ----------
    _registry : Dict[str, type]
        Dictionary mapping gate names to their classes.
    """
    _registry: Dict[str, type] = {}

    @classmethod
    def get(cls, name: str) -> type:
        """
        Get the class registered under ``name``.

        Raises
        ------
        NotImplementedError
            If no gate with that name is registered.
        """
        if name not in cls._registry:
            raise NotImplementedError(f"No gate operation named '{name}'")
        return cls._registry[name]

    @classmethod
    def names(cls) -> List[str]:
        """All registered gate names, in registration order."""
        return list(cls._registry)

    @staticmethod
    def register_gate(name: str) -> Callable[[type], type]:
        """
        Class decorator registering a gate under its hqslang name.

        Example
        -------
        @QuantumGate.register_gate("CNOT")
        @dataclass(frozen=True)
        class CNOT(TwoQubitGateOperation):
            ...
        """
        def decorator(gate_cls):
            gate_cls._hqslang = name
            QuantumGate._registry[name] = gate_cls
            return gate_cls
        return decorator


class Operation(ABC):
    """
    Root of all operations.

    Subclasses are frozen dataclasses; ``_tag_path`` holds the position of
    the operation in the tag hierarchy, the hqslang name is appended to it.
    """
    _hqslang: ClassVar[str] = "Operation"
    _tag_path: ClassVar[Tuple[str, ...]] = ("Operation",)

    def __post_init__(self):
        for f in dataclasses.fields(self):
            if f.type in _PARAMETER_TYPES:
                object.__setattr__(self, f.name, CalculatorFloat(getattr(self, f.name)))

    def hqslang(self) -> str:
        """Canonical name of the operation."""
        return self._hqslang

    def tags(self) -> Tuple[str, ...]:
        """Tag path from ``"Operation"`` down to the operation's own name."""
        return self._tag_path + (self._hqslang,)

    @abstractmethod
    def involved_qubits(self) -> FrozenSet[int]:
        """Set of qubit indices the operation acts on."""

    @abstractmethod
    def _remapped_qubit_fields(self, mapping: Mapping[int, int]) -> Dict[str, object]:
        """New values of the qubit fields under ``mapping``."""

    def parameters(self) -> Dict[str, CalculatorFloat]:
        """All ``CalculatorFloat`` parameters by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if isinstance(getattr(self, f.name), CalculatorFloat)
        }

    def is_parametrized(self) -> bool:
        """True if any parameter is symbolic."""
        return any(not value.is_float for value in self.parameters().values())

    def substitute_parameters(self, calculator: Calculator) -> "Operation":
        """
        Replace every symbolic parameter by its value under ``calculator``.

        Parameters
        ----------
        calculator : Calculator
            Provides the variable bindings.

        Returns
        -------
        Operation
            A new operation of the same kind with concrete parameters.

        Raises
        ------
        CalculatorError
            If a variable needed by any parameter is missing.
        """
        changes = {
            name: calculator.substitute(value)
            for name, value in self.parameters().items()
            if not value.is_float
        }
        if not changes:
            return self
        return dataclasses.replace(self, **changes)

    def remap_qubits(self, mapping: Mapping[int, int]) -> "Operation":
        """
        Return a copy acting on ``mapping[q]`` instead of every qubit ``q``.

        Raises
        ------
        QubitMappingError
            If any involved qubit is missing from ``mapping``.
        """
        for qubit in sorted(self.involved_qubits()):
            if qubit not in mapping:
                raise QubitMappingError(qubit)
        return dataclasses.replace(self, **self._remapped_qubit_fields(mapping))


class GateOperation(Operation):
    """Operation acting with a unitary matrix on its qubits."""
    _tag_path: ClassVar[Tuple[str, ...]] = ("Operation", "GateOperation")

    @abstractmethod
    def unitary_matrix(self) -> np.ndarray:
        """
        Dense unitary matrix of the gate.

        Returns
        -------
        np.ndarray
            Complex ``2**k x 2**k`` matrix; the first qubit of
            ``matrix_qubits()`` is the most significant bit.

        Raises
        ------
        ParameterError
            If a parameter is still symbolic.
        """

    @abstractmethod
    def matrix_qubits(self) -> Tuple[int, ...]:
        """Qubits in the tensor order of ``unitary_matrix()``, most significant first."""

    def to_qiskit(self, num_qubits: Optional[int] = None):
        """Single-instruction qiskit ``QuantumCircuit``, see ``Circuit.to_qiskit``."""
        return Circuit([self]).to_qiskit(num_qubits)


class Rotate:
    """
    Mixin for gates with a rotation angle ``theta``.

    ``powercf`` scales the angle, ``overrotate`` adds Gaussian noise to it.
    Both return new gates.
    """

    def powercf(self, power) -> "Rotate":
        """
        Fractional power of the gate: ``theta`` becomes ``power * theta``.

        Parameters
        ----------
        power : Union[float, str, CalculatorFloat]
            Exponent, concrete or symbolic.
        """
        return dataclasses.replace(self, theta=CalculatorFloat(power) * self.theta)

    def overrotate(self, amplitude: float, variance: float,
                   rng: Optional[np.random.Generator] = None) -> "Rotate":
        """
        Return the gate with a randomly over-rotated angle.

        The new angle is ``theta + amplitude * N(0, variance)`` where the
        normal distribution is parametrised by its standard deviation.

        Parameters
        ----------
        amplitude : float
            Scale of the over-rotation.
        variance : float
            Standard deviation of the normal distribution.
        rng : Optional[np.random.Generator]
            Random generator, a fresh default generator if omitted.
        """
        rng = np.random.default_rng() if rng is None else rng
        return dataclasses.replace(
            self, theta=self.theta + amplitude * rng.normal(0.0, variance)
        )


@dataclass(frozen=True)
class SingleQubitGateOperation(GateOperation):
    """Gate acting on exactly one qubit."""
    qubit: int

    _tag_path: ClassVar[Tuple[str, ...]] = (
        "Operation", "GateOperation", "SingleQubitGateOperation",
    )

    def involved_qubits(self) -> FrozenSet[int]:
        return frozenset((self.qubit,))

    def matrix_qubits(self) -> Tuple[int, ...]:
        return (self.qubit,)

    def _remapped_qubit_fields(self, mapping):
        return {"qubit": mapping[self.qubit]}


@dataclass(frozen=True, slots=True)
class KakDecomposition:
    """
    KAK decomposition of a two-qubit gate.

    The gate equals
    ``exp(i * global_phase) * A * exp(i (k0 XX + k1 YY + k2 ZZ)) * B``
    where ``B`` is the unitary of ``circuit_before`` and ``A`` the unitary
    of ``circuit_after`` (identity when ``None``).

    Attributes
    ----------
    global_phase : CalculatorFloat
        Global phase of the decomposition.
    k_vector : Tuple[CalculatorFloat, CalculatorFloat, CalculatorFloat]
        Coefficients of XX, YY and ZZ.
    circuit_before : Optional[Circuit]
        Single-qubit operations applied before the entangling block.
    circuit_after : Optional[Circuit]
        Single-qubit operations applied after the entangling block.
    """
    global_phase: CalculatorFloat
    k_vector: Tuple[CalculatorFloat, CalculatorFloat, CalculatorFloat]
    circuit_before: Optional[Circuit] = None
    circuit_after: Optional[Circuit] = None

    # Circuit is mutable, so records compare by value but are not hashable
    __hash__ = None

    def __post_init__(self):
        object.__setattr__(self, "global_phase", CalculatorFloat(self.global_phase))
        object.__setattr__(self, "k_vector", tuple(CalculatorFloat(k) for k in self.k_vector))
        if len(self.k_vector) != 3:
            raise ValueError(f"k_vector needs three components, got {len(self.k_vector)}")


@dataclass(frozen=True)
class TwoQubitGateOperation(GateOperation):
    """
    Gate acting on exactly two qubits.

    ``control`` is the most significant and ``target`` the least
    significant qubit of the 4x4 unitary.
    """
    control: int
    target: int

    _tag_path: ClassVar[Tuple[str, ...]] = (
        "Operation", "GateOperation", "TwoQubitGateOperation",
    )

    def involved_qubits(self) -> FrozenSet[int]:
        return frozenset((self.control, self.target))

    def matrix_qubits(self) -> Tuple[int, ...]:
        return (self.control, self.target)

    def _remapped_qubit_fields(self, mapping):
        return {"control": mapping[self.control], "target": mapping[self.target]}

    @abstractmethod
    def kak_decomposition(self) -> KakDecomposition:
        """KAK decomposition of the gate; symbolic parameters stay symbolic."""


@dataclass(frozen=True)
class MultiQubitGateOperation(GateOperation):
    """
    Gate acting on an ordered list of qubits.

    The first qubit is the most significant bit of the unitary.
    """
    qubits: Tuple[int, ...]

    _tag_path: ClassVar[Tuple[str, ...]] = (
        "Operation", "GateOperation", "MultiQubitGateOperation",
    )

    def __post_init__(self):
        object.__setattr__(self, "qubits", tuple(int(q) for q in self.qubits))
        super().__post_init__()

    def involved_qubits(self) -> FrozenSet[int]:
        return frozenset(self.qubits)

    def matrix_qubits(self) -> Tuple[int, ...]:
        return self.qubits

    def _remapped_qubit_fields(self, mapping):
        return {"qubits": tuple(mapping[q] for q in self.qubits)}

    @abstractmethod
    def circuit(self) -> Circuit:
        """Compilation of the gate into one- and two-qubit gates."""
