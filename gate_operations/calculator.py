# -*- coding: utf-8 -*-

# gate_operations/calculator.py
"""
Scalar layer for gate parameters.

Gate parameters are either concrete finite floats or symbolic expressions
(strings such as ``"theta"`` or ``"(2.0 * theta)"``). ``CalculatorFloat``
is the tagged value carrying one of the two, ``CalculatorComplex`` a pair of
them, and ``Calculator`` evaluates symbolic expressions against a set of
variable bindings.

Notes
-----
- Arithmetic on two concrete values always stays concrete.
- Arithmetic involving a symbolic value builds a new, parenthesised
  expression string; a few identities (``x + 0``, ``1 * x``, ``0 * x``,
  ``x / 1``) are simplified so that e.g. scaling by one is a no-op.
- Symbolic strings are only parsed (with sympy) when a ``Calculator``
  evaluates them.
"""

from __future__ import annotations

import math
import numbers
import re
from functools import lru_cache
from typing import Dict, Optional, Union

import sympy
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations
from tokenize import TokenError

from .errors import CalculatorError, ParameterError

__all__ = [
    "CalculatorFloat",
    "CalculatorComplex",
    "Calculator",
]

_PARSE_CACHE_SIZE = 1024

# Bare identifiers that are not followed by a call parenthesis are variables
_IDENTIFIER = re.compile(r"\b[A-Za-z_]\w*\b(?!\s*\()")
_CONSTANTS = {"pi": sympy.pi, "e": sympy.E}
# ``^`` is a power, as in ``"x^2"``
_TRANSFORMATIONS = standard_transformations + (convert_xor,)


class _Atan2(sympy.Function):
    """``atan2(y, x)`` evaluated like ``math.atan2``, so ``atan2(0, 0) == 0``."""
    nargs = 2

    @classmethod
    def eval(cls, y, x):
        if y.is_number and x.is_number:
            return sympy.Float(math.atan2(float(y), float(x)))
        return None


_FUNCTIONS = {"atan2": _Atan2}


def _format_number(x: float) -> str:
    return repr(float(x))


class CalculatorFloat:
    """
    A real scalar that is either a finite float or a symbolic expression.

    Parameters
    ----------
    value : Union[int, float, str, CalculatorFloat]
        Numbers give the concrete variant, strings the symbolic variant.

    Raises
    ------
    CalculatorError
        If a number is NaN or infinite.
    TypeError
        If ``value`` has an unsupported type.

    Examples
    --------
    >>> CalculatorFloat(0.5) * 2
    CalculatorFloat(1.0)
    >>> CalculatorFloat("theta") / 2
    CalculatorFloat('(theta / 2.0)')
    """

    __slots__ = ("_value",)

    ZERO: "CalculatorFloat"
    PI: "CalculatorFloat"
    FRAC_PI_2: "CalculatorFloat"
    FRAC_PI_4: "CalculatorFloat"

    def __init__(self, value: Union[int, float, str, "CalculatorFloat"] = 0.0):
        if isinstance(value, CalculatorFloat):
            value = value._value
        elif isinstance(value, str):
            value = value.strip()
        elif isinstance(value, numbers.Real):
            value = float(value)
            if not math.isfinite(value):
                raise CalculatorError(
                    f"Non-finite value {value} is not a valid CalculatorFloat",
                    kind="non_finite_result",
                )
        else:
            raise TypeError(f"Cannot build CalculatorFloat from {type(value).__name__}")
        self._value = value

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def is_float(self) -> bool:
        """True if the value is a concrete number."""
        return not isinstance(self._value, str)

    @property
    def value(self) -> Union[float, str]:
        """The wrapped float or expression string."""
        return self._value

    def float(self) -> float:
        """
        Convert to a Python float.

        Raises
        ------
        ParameterError
            If the value is symbolic.
        """
        if isinstance(self._value, str):
            raise ParameterError(self._value)
        return self._value

    def __float__(self) -> float:
        return self.float()

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _is_const(self, c: float) -> bool:
        return self.is_float and self._value == c

    def __add__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_float and other.is_float:
            return CalculatorFloat(self._value + other._value)
        if other._is_const(0.0):
            return self
        if self._is_const(0.0):
            return other
        return CalculatorFloat(f"({self} + {other})")

    def __radd__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.__add__(self)

    def __sub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_float and other.is_float:
            return CalculatorFloat(self._value - other._value)
        if other._is_const(0.0):
            return self
        if self._is_const(0.0):
            return -other
        return CalculatorFloat(f"({self} - {other})")

    def __rsub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.__sub__(self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_float and other.is_float:
            return CalculatorFloat(self._value * other._value)
        if self._is_const(0.0) or other._is_const(0.0):
            return CalculatorFloat.ZERO
        if self._is_const(1.0):
            return other
        if other._is_const(1.0):
            return self
        return CalculatorFloat(f"({self} * {other})")

    def __rmul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.__mul__(self)

    def __truediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if other._is_const(0.0):
            raise ZeroDivisionError(f"Division of {self} by zero")
        if self.is_float and other.is_float:
            return CalculatorFloat(self._value / other._value)
        if other._is_const(1.0):
            return self
        if self._is_const(0.0):
            return CalculatorFloat.ZERO
        return CalculatorFloat(f"({self} / {other})")

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.__truediv__(self)

    def __neg__(self) -> "CalculatorFloat":
        if self.is_float:
            return CalculatorFloat(-self._value)
        return CalculatorFloat(f"(-{self._value})")

    def __pos__(self) -> "CalculatorFloat":
        return self

    def __abs__(self) -> "CalculatorFloat":
        return self.abs()

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def cos(self) -> "CalculatorFloat":
        if self.is_float:
            return CalculatorFloat(math.cos(self._value))
        return CalculatorFloat(f"cos({self._value})")

    def sin(self) -> "CalculatorFloat":
        if self.is_float:
            return CalculatorFloat(math.sin(self._value))
        return CalculatorFloat(f"sin({self._value})")

    def abs(self) -> "CalculatorFloat":
        """Absolute value (the norm of a real number)."""
        if self.is_float:
            return CalculatorFloat(abs(self._value))
        return CalculatorFloat(f"abs({self._value})")

    def sqrt(self) -> "CalculatorFloat":
        if self.is_float:
            if self._value < 0.0:
                raise CalculatorError(
                    f"Square root of negative value {self._value}",
                    kind="non_finite_result",
                )
            return CalculatorFloat(math.sqrt(self._value))
        return CalculatorFloat(f"sqrt({self._value})")

    def atan2(self, other) -> "CalculatorFloat":
        """
        Two-argument arctangent ``atan2(self, other)``.

        Parameters
        ----------
        other : Union[float, str, CalculatorFloat]
            The x coordinate; ``self`` is the y coordinate.
        """
        other = CalculatorFloat(other)
        if self.is_float and other.is_float:
            return CalculatorFloat(math.atan2(self._value, other._value))
        return CalculatorFloat(f"atan2({self}, {other})")

    # ------------------------------------------------------------------
    # Comparison and representation
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if isinstance(other, CalculatorFloat):
            return self.is_float == other.is_float and self._value == other._value
        if isinstance(other, str):
            return self._value == other.strip()
        if isinstance(other, numbers.Real):
            return self.is_float and self._value == float(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"CalculatorFloat({self._value!r})"

    def __str__(self) -> str:
        if self.is_float:
            return _format_number(self._value)
        return self._value


def _coerce(value) -> CalculatorFloat:
    if isinstance(value, CalculatorFloat):
        return value
    if isinstance(value, (numbers.Real, str)):
        return CalculatorFloat(value)
    return NotImplemented


CalculatorFloat.ZERO = CalculatorFloat(0.0)
CalculatorFloat.PI = CalculatorFloat(math.pi)
CalculatorFloat.FRAC_PI_2 = CalculatorFloat(math.pi / 2.0)
CalculatorFloat.FRAC_PI_4 = CalculatorFloat(math.pi / 4.0)


class CalculatorComplex:
    """
    A complex scalar built from two ``CalculatorFloat`` parts.

    Parameters
    ----------
    re : Union[float, str, complex, CalculatorFloat, CalculatorComplex]
        Real part, or a full complex value.
    im : Union[float, str, CalculatorFloat]
        Imaginary part (ignored when ``re`` is already complex).
    """

    __slots__ = ("_re", "_im")

    def __init__(self, re=0.0, im=0.0):
        if isinstance(re, CalculatorComplex):
            re, im = re._re, re._im
        elif isinstance(re, complex):
            re, im = re.real, re.imag
        self._re = CalculatorFloat(re)
        self._im = CalculatorFloat(im)

    @classmethod
    def from_float(cls, value) -> "CalculatorComplex":
        """Lift a real scalar to a complex one with zero imaginary part."""
        return cls(CalculatorFloat(value), CalculatorFloat.ZERO)

    @property
    def real(self) -> CalculatorFloat:
        return self._re

    @property
    def imag(self) -> CalculatorFloat:
        return self._im

    @property
    def is_float(self) -> bool:
        return self._re.is_float and self._im.is_float

    def norm(self) -> CalculatorFloat:
        """Absolute value ``sqrt(re**2 + im**2)``."""
        if self.is_float:
            return CalculatorFloat(math.hypot(self._re.value, self._im.value))
        return (self._re * self._re + self._im * self._im).sqrt()

    def abs(self) -> CalculatorFloat:
        return self.norm()

    def __abs__(self) -> CalculatorFloat:
        return self.norm()

    def arg(self) -> CalculatorFloat:
        """Complex argument ``atan2(im, re)``."""
        return self._im.atan2(self._re)

    def conj(self) -> "CalculatorComplex":
        return CalculatorComplex(self._re, -self._im)

    def __add__(self, other):
        other = _coerce_complex(other)
        if other is NotImplemented:
            return NotImplemented
        return CalculatorComplex(self._re + other._re, self._im + other._im)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce_complex(other)
        if other is NotImplemented:
            return NotImplemented
        return CalculatorComplex(self._re - other._re, self._im - other._im)

    def __rsub__(self, other):
        other = _coerce_complex(other)
        if other is NotImplemented:
            return NotImplemented
        return other.__sub__(self)

    def __mul__(self, other):
        other = _coerce_complex(other)
        if other is NotImplemented:
            return NotImplemented
        re = self._re * other._re - self._im * other._im
        im = self._re * other._im + self._im * other._re
        return CalculatorComplex(re, im)

    __rmul__ = __mul__

    def __neg__(self) -> "CalculatorComplex":
        return CalculatorComplex(-self._re, -self._im)

    def __complex__(self) -> complex:
        return complex(self._re.float(), self._im.float())

    def __eq__(self, other) -> bool:
        if isinstance(other, CalculatorComplex):
            return self._re == other._re and self._im == other._im
        if isinstance(other, (numbers.Number, str, CalculatorFloat)):
            other = _coerce_complex(other)
            return self._re == other._re and self._im == other._im
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._re, self._im))

    def __repr__(self) -> str:
        return f"CalculatorComplex(re={self._re!r}, im={self._im!r})"


def _coerce_complex(value) -> CalculatorComplex:
    if isinstance(value, CalculatorComplex):
        return value
    if isinstance(value, (numbers.Number, str, CalculatorFloat)):
        return CalculatorComplex(value)
    return NotImplemented


@lru_cache(maxsize=_PARSE_CACHE_SIZE)
def _parse(expression: str) -> sympy.Expr:
    """
    Parse an expression string into a sympy expression.

    Every bare identifier except the constants ``pi`` and ``e`` becomes a
    plain ``Symbol``, so variable names never collide with sympy builtins
    such as ``gamma`` or ``I``.
    """
    local_dict = {
        name: sympy.Symbol(name)
        for name in _IDENTIFIER.findall(expression)
        if name not in _CONSTANTS
    }
    local_dict.update(_CONSTANTS)
    local_dict.update(_FUNCTIONS)
    try:
        return parse_expr(expression, local_dict=local_dict, transformations=_TRANSFORMATIONS)
    except (SyntaxError, TypeError, TokenError) as err:
        raise CalculatorError(
            f"Could not parse expression '{expression}'",
            kind="parse_error",
            name=expression,
        ) from err


class Calculator:
    """
    Evaluator for symbolic ``CalculatorFloat`` expressions.

    Holds a mapping from variable names to finite floats.

    Parameters
    ----------
    variables : Optional[Dict[str, float]]
        Initial variable bindings.

    Examples
    --------
    >>> calc = Calculator({"theta": 0.5})
    >>> calc.evaluate(CalculatorFloat("theta") * 2)
    1.0
    """

    def __init__(self, variables: Optional[Dict[str, float]] = None):
        self._variables: Dict[str, float] = {}
        for name, value in (variables or {}).items():
            self.set_variable(name, value)

    def set_variable(self, name: str, value: float) -> None:
        """
        Bind ``name`` to a finite float.

        Raises
        ------
        CalculatorError
            If ``value`` is not finite.
        """
        value = float(value)
        if not math.isfinite(value):
            raise CalculatorError(
                f"Variable '{name}' set to non-finite value {value}",
                kind="non_finite_result",
                name=name,
            )
        self._variables[name] = value

    def get_variable(self, name: str) -> float:
        """
        Return the value bound to ``name``.

        Raises
        ------
        CalculatorError
            If the variable is not set.
        """
        try:
            return self._variables[name]
        except KeyError:
            raise CalculatorError(
                f"Variable '{name}' is not set", kind="missing_variable", name=name
            ) from None

    @property
    def variables(self) -> Dict[str, float]:
        return dict(self._variables)

    def evaluate(self, value: Union[float, str, CalculatorFloat]) -> float:
        """
        Evaluate a scalar to a finite float.

        Parameters
        ----------
        value : Union[float, str, CalculatorFloat]
            Concrete values are returned unchanged, expressions are parsed
            and evaluated with the current bindings.

        Returns
        -------
        float
            The numerical value.

        Raises
        ------
        CalculatorError
            If a variable is missing, the expression cannot be parsed, or
            the result is not a finite real number.
        """
        value = CalculatorFloat(value)
        if value.is_float:
            return value.value
        expr = _parse(value.value)

        names = sorted(symbol.name for symbol in expr.free_symbols)
        missing = [name for name in names if name not in self._variables]
        if missing:
            raise CalculatorError(
                f"Variable '{missing[0]}' is not set", kind="missing_variable", name=missing[0]
            )
        bindings = {sympy.Symbol(name): self._variables[name] for name in names}
        try:
            result = float(expr.subs(bindings))
        except (TypeError, ValueError) as err:
            raise CalculatorError(
                f"Expression '{value.value}' does not evaluate to a real number",
                kind="non_finite_result",
                name=value.value,
            ) from err
        if not math.isfinite(result):
            raise CalculatorError(
                f"Expression '{value.value}' evaluates to {result}",
                kind="non_finite_result",
                name=value.value,
            )
        return result

    def substitute(self, value: Union[float, str, CalculatorFloat]) -> CalculatorFloat:
        """Evaluate ``value`` and wrap the result as a concrete ``CalculatorFloat``."""
        return CalculatorFloat(self.evaluate(value))
