import numpy as np
import pytest

from datacomm import ExpressionError
from datacomm.expression import (
    BinaryOp,
    Call,
    MAX_DEPTH,
    Number,
    Variable,
    compile_expression,
    evaluate,
    parse,
    tokenize,
)

T = np.linspace(0, 2 * np.pi, 17)


def ev(text, t=T):
    return evaluate(parse(text), t)


def test_parse_tree():
    assert parse("2sin(t)") == BinaryOp("*", Number(2.0), Call("sin", Variable()))


@pytest.mark.parametrize(
    "text, expected",
    [
        ("sin(t)", np.sin(T)),
        ("2sin(3t)", 2 * np.sin(3 * T)),
        ("2 t", 2 * T),
        ("2pit", 2 * np.pi * T),
        ("(t+1)(t-1)", T**2 - 1),
        ("sin(t)cos(t)", np.sin(T) * np.cos(T)),
        ("-t + 1", 1 - T),
        ("1 + 2*3", np.full_like(T, 7.0)),
        ("3 - -2", np.full_like(T, 5.0)),
        ("6/2t", 3 * T),
        ("0.5cos(t) + .25", 0.5 * np.cos(T) + 0.25),
        ("SIN(PI/2)", np.ones_like(T)),
    ],
)
def test_evaluate(text, expected):
    assert np.allclose(ev(text), expected)


def test_constant_broadcasts():
    out = ev("2", np.arange(3))
    assert out.shape == (3,)
    assert np.all(out == 2)


def test_scalar_time():
    assert float(ev("2t", 1.5)) == pytest.approx(3.0)


def test_division_by_zero():
    out = ev("1/t", np.array([0.0, 2.0]))
    assert np.isinf(out[0])
    assert out[1] == 0.5


@pytest.mark.parametrize(
    "text",
    ["", "   ", "sin t", "foo(t)", "(t", "t)", "2 $ 3", "__import__('os')", "1e3", "2 +"],
)
def test_invalid(text):
    with pytest.raises(ExpressionError):
        parse(text)


def test_tokenize_positions():
    tokens = tokenize("2 sin(t)")
    assert [t.text for t in tokens] == ["2", "sin", "(", "t", ")", ""]
    assert tokens[1].pos == 2


def test_compile_expression():
    f = compile_expression("sin(2t)")
    assert np.allclose(f(T), np.sin(2 * T))
    assert "sin(2t)" in repr(f)


@pytest.mark.parametrize(
    "text",
    ["(" * 5000 + "t" + ")" * 5000, "-" * 5000 + "t", "sin(" * 500 + "t" + ")" * 500],
)
def test_deep_nesting_is_rejected(text):
    with pytest.raises(ExpressionError, match="nests deeper"):
        parse(text)


def test_nesting_within_limit():
    text = "(" * MAX_DEPTH + "t" + ")" * MAX_DEPTH
    assert np.allclose(ev(text), T)
    assert np.allclose(ev("-" * 10 + "t"), T)


def test_long_flat_sum():
    out = ev(" + ".join(["t"] * 5000))
    assert np.allclose(out, 5000 * T)
