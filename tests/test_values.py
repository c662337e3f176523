"""Test value types and promotion rules."""
from decimal import Decimal

from pydantic import ValidationError
import pytest

from expression_evaluator.common.errors import DomainError, InvalidOperandTypeError, UnboundVariableError
from expression_evaluator.engine.values import (
    Boolean,
    Integer,
    Real,
    Variable,
    dereference,
    make_real,
    promote,
    require_boolean,
    require_number,
    to_real,
)
from expression_evaluator.frontend.variables import VariableTable


def test_integer_to_text() -> None:
    """Integers render as exact decimal strings, however large."""
    assert Integer(value=-42).to_text() == "-42"
    assert Integer(value=10**50).to_text(places=2) == "1" + "0" * 50


def test_real_to_text_places() -> None:
    """Reals render fixed-point with the requested number of fractional digits."""
    assert Real(value=Decimal("5.5")).to_text(places=3) == "5.500"
    assert Real(value=Decimal("3.14159")).to_text(places=2) == "3.14"


def test_real_to_text_default_precision() -> None:
    """Without places, Reals render with the default working precision."""
    text = Real(value=Decimal("0.5")).to_text()
    assert text.split(".")[1] == "5" + "0" * 999


def test_boolean_to_text() -> None:
    """Booleans render as True/False."""
    assert Boolean(value=True).to_text() == "True"
    assert Boolean(value=False).to_text() == "False"


def test_integer_rejects_bool() -> None:
    """Booleans are not silently accepted as Integers."""
    with pytest.raises(ValidationError):
        Integer(value=True)


def test_values_are_frozen() -> None:
    """Scalar values are immutable."""
    value = Integer(value=1)
    with pytest.raises(ValidationError):
        value.value = 2


def test_variable_dereference() -> None:
    """A Variable reads its binding from the store it was created with."""
    table = VariableTable()
    x = Variable(name="x", store=table)

    with pytest.raises(UnboundVariableError):
        x.dereference()

    x.assign(Integer(value=3))
    assert x.dereference() == Integer(value=3)
    assert Variable(name="x", store=table).dereference() == Integer(value=3)
    assert x.to_text() == "3"


def test_dereference_passes_scalars_through() -> None:
    """dereference returns non-Variable values unchanged."""
    value = Boolean(value=False)
    assert dereference(value) is value


def test_make_real_rejects_non_finite() -> None:
    """Infinite and NaN decimals never become Reals."""
    with pytest.raises(DomainError):
        make_real(Decimal("Infinity"))
    with pytest.raises(DomainError):
        make_real(Decimal("NaN"))


def test_promote_integers_stay_integer() -> None:
    """Two Integers are not promoted."""
    left, right = promote(Integer(value=2), Integer(value=3), "addition")
    assert left == Integer(value=2)
    assert right == Integer(value=3)


def test_promote_mixed_to_real() -> None:
    """An Integer paired with a Real becomes a Real."""
    left, right = promote(Integer(value=2), Real(value=Decimal("3.5")), "addition")
    assert isinstance(left, Real) and left.value == 2
    assert isinstance(right, Real) and right.value == Decimal("3.5")


def test_promote_dereferences_variables() -> None:
    """Variables are replaced by their bound values before promotion."""
    table = VariableTable(bindings={"x": Real(value=Decimal("1.5"))})
    left, right = promote(Variable(name="x", store=table), Integer(value=1), "addition")
    assert left.value == Decimal("1.5")
    assert isinstance(right, Real)


def test_promote_rejects_boolean() -> None:
    """Booleans do not take part in arithmetic."""
    with pytest.raises(InvalidOperandTypeError, match="got a boolean"):
        promote(Boolean(value=True), Integer(value=1), "addition")


def test_require_boolean_rejects_number() -> None:
    """Logical operations reject numbers."""
    assert require_boolean(Boolean(value=True), "and") is True
    with pytest.raises(InvalidOperandTypeError):
        require_boolean(Integer(value=1), "and")


def test_require_number_and_to_real() -> None:
    """Numbers pass require_number and convert to Real."""
    assert require_number(Integer(value=7), "abs") == Integer(value=7)
    assert to_real(Integer(value=7), "sqrt") == Real(value=Decimal(7))
    with pytest.raises(InvalidOperandTypeError):
        to_real(Boolean(value=False), "sqrt")
