# -*- coding: utf-8 -*-

import math
import pytest

from gate_operations.calculator import CalculatorFloat, CalculatorComplex, Calculator
from gate_operations.errors     import CalculatorError, ParameterError


# ----------------------------------------------------------------------
# CalculatorFloat
# ----------------------------------------------------------------------

def test_float_variant():
    x = CalculatorFloat(0.5)
    assert x.is_float
    assert x.float() == 0.5
    assert float(x) == 0.5
    assert x == 0.5
    assert repr(x) == "CalculatorFloat(0.5)"


def test_symbolic_variant():
    x = CalculatorFloat("theta")
    assert not x.is_float
    assert x == "theta"
    assert x == CalculatorFloat("theta")
    assert x != CalculatorFloat(0.0)
    assert repr(x) == "CalculatorFloat('theta')"
    assert str(x) == "theta"


def test_symbolic_to_float_raises_parameter_error():
    with pytest.raises(ParameterError) as info:
        CalculatorFloat("theta").float()
    assert isinstance(info.value, CalculatorError)
    assert info.value.kind == "symbolic_parameter"
    assert info.value.name == "theta"


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_rejected(value):
    with pytest.raises(CalculatorError):
        CalculatorFloat(value)


def test_unsupported_type():
    with pytest.raises(TypeError):
        CalculatorFloat([1.0])


def test_constants():
    assert CalculatorFloat.ZERO == 0.0
    assert CalculatorFloat.PI == math.pi
    assert CalculatorFloat.FRAC_PI_2 == math.pi / 2
    assert CalculatorFloat.FRAC_PI_4 == math.pi / 4


@pytest.mark.parametrize("a,b", [(0.3, 1.7), (-2.0, 0.25), (1.0, -1.0)])
def test_concrete_arithmetic_stays_concrete(a, b):
    x, y = CalculatorFloat(a), CalculatorFloat(b)
    assert (x + y) == a + b
    assert (x - y) == a - b
    assert (x * y) == a * b
    assert (x / y) == a / b
    assert (-x) == -a
    assert (a + y).is_float and (a * y).is_float


def test_symbolic_arithmetic_builds_expressions():
    x = CalculatorFloat("theta")
    assert (x / 2.0).value == "(theta / 2.0)"
    assert (x * 2).value == "(theta * 2.0)"
    assert (x + 1.5).value == "(theta + 1.5)"
    assert (1.5 - x).value == "(1.5 - theta)"
    assert (-x).value == "(-theta)"
    assert x.cos().value == "cos(theta)"


def test_symbolic_identities():
    x = CalculatorFloat("theta")
    assert x + 0 == x
    assert 0 + x == x
    assert x * 1 == x
    assert 1 * x == x
    assert x / 1 == x
    assert x * 0 == CalculatorFloat.ZERO
    assert 0 * x == CalculatorFloat.ZERO


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        CalculatorFloat("theta") / 0.0


def test_hash_consistent_with_equality():
    assert hash(CalculatorFloat(1.0)) == hash(CalculatorFloat(1))
    assert len({CalculatorFloat("a"), CalculatorFloat("a"), CalculatorFloat(2.0)}) == 2


# ----------------------------------------------------------------------
# CalculatorComplex
# ----------------------------------------------------------------------

def test_complex_norm_and_arg():
    z = CalculatorComplex(3.0, 4.0)
    assert z.norm() == 5.0
    assert math.isclose(z.arg().float(), math.atan2(4.0, 3.0))
    assert complex(z) == 3 + 4j
    assert z.conj() == CalculatorComplex(3.0, -4.0)


def test_complex_arithmetic():
    a = CalculatorComplex(1.0, 2.0)
    b = CalculatorComplex(0.5, -1.0)
    assert complex(a + b) == (1 + 2j) + (0.5 - 1j)
    assert complex(a - b) == (1 + 2j) - (0.5 - 1j)
    assert complex(a * b) == (1 + 2j) * (0.5 - 1j)
    assert CalculatorComplex.from_float(2.0) == CalculatorComplex(2.0, 0.0)


def test_symbolic_complex_evaluates():
    z = CalculatorComplex("a", 1.0)
    calc = Calculator({"a": 0.0})
    assert not z.is_float
    assert math.isclose(calc.evaluate(z.norm()), 1.0)
    assert math.isclose(calc.evaluate(z.arg()), math.pi / 2)


# ----------------------------------------------------------------------
# Calculator
# ----------------------------------------------------------------------

def test_evaluate_expression():
    calc = Calculator({"theta": 0.5})
    assert calc.evaluate(CalculatorFloat("theta") * 2) == 1.0
    assert math.isclose(calc.evaluate("cos(theta) + sin(theta)"), math.cos(0.5) + math.sin(0.5))
    assert math.isclose(calc.evaluate("pi / 2"), math.pi / 2)
    assert calc.evaluate(1.25) == 1.25


def test_substitute_returns_concrete():
    calc = Calculator()
    calc.set_variable("x", 2.0)
    result = calc.substitute(CalculatorFloat("x") / 4.0)
    assert result.is_float
    assert result == 0.5
    assert calc.get_variable("x") == 2.0
    assert calc.variables == {"x": 2.0}


def test_variable_names_shadowing_builtins():
    calc = Calculator({"gamma": 0.25, "I": 2.0})
    assert calc.evaluate("gamma * I") == 0.5


def test_missing_variable():
    with pytest.raises(CalculatorError) as info:
        Calculator({"theta": 1.0}).evaluate("theta + phi")
    assert info.value.kind == "missing_variable"
    assert info.value.name == "phi"


def test_get_missing_variable():
    with pytest.raises(CalculatorError) as info:
        Calculator().get_variable("x")
    assert info.value.kind == "missing_variable"


def test_non_finite_result():
    with pytest.raises(CalculatorError) as info:
        Calculator({"x": -1.0}).evaluate("sqrt(x)")
    assert info.value.kind == "non_finite_result"


def test_non_finite_variable_rejected():
    with pytest.raises(CalculatorError):
        Calculator({"x": math.inf})


def test_parse_error():
    with pytest.raises(CalculatorError) as info:
        Calculator({"theta": 1.0}).evaluate("theta +")
    assert info.value.kind == "parse_error"


def test_atan2_at_origin_matches_math():
    calc = Calculator({"y": 0.0, "x": 0.0})
    assert calc.evaluate(CalculatorFloat("y").atan2("x")) == math.atan2(0.0, 0.0)
    assert calc.evaluate(CalculatorComplex("x", "y").arg()) == 0.0
    assert math.isclose(Calculator({"y": -1.0, "x": 0.0}).evaluate("atan2(y, x)"), -math.pi / 2)


def test_caret_is_power():
    calc = Calculator({"x": 3.0})
    assert calc.evaluate("x^2") == 9.0
    assert calc.evaluate("x**2") == 9.0
