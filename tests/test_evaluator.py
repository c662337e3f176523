"""Test class Evaluator."""
from decimal import Decimal

import pytest

from expression_evaluator.common.config import EngineConfig
from expression_evaluator.common.errors import (
    DomainError,
    InsufficientOperandsError,
    InvalidAssignmentTargetError,
    InvalidOperandTypeError,
    TooManyOperandsError,
    UnboundVariableError,
    UnsupportedTokenError,
)
from expression_evaluator.engine.catalog import CATALOG
from expression_evaluator.engine.evaluator import Evaluator, evaluate
from expression_evaluator.engine.tokens import Token
from expression_evaluator.engine.values import Boolean, Integer, Real, Variable
from expression_evaluator.frontend.variables import VariableTable


def num(value) -> Token:
    """Integer operand for ints, Real operand for anything else."""
    if isinstance(value, int):
        return Token.operand(Integer(value=value))
    return Token.operand(Real(value=Decimal(value)))


def boolean(value: bool) -> Token:
    return Token.operand(Boolean(value=value))


def op(name: str) -> Token:
    return Token.operation(name)


def test_empty_postfix() -> None:
    """An empty sequence has no result."""
    with pytest.raises(InsufficientOperandsError):
        evaluate([])


@pytest.mark.parametrize("name", sorted(CATALOG))
def test_arity_is_checked_before_popping(name) -> None:
    """Every operation fails cleanly when the stack holds fewer operands than it needs."""
    arity = CATALOG[name].arity
    postfix = [num(1)] * (arity - 1) + [op(name)]
    with pytest.raises(InsufficientOperandsError):
        evaluate(postfix)


def test_too_many_operands() -> None:
    """Leftover values are reported instead of silently dropped."""
    with pytest.raises(TooManyOperandsError):
        evaluate([num(1), num(2)])
    with pytest.raises(TooManyOperandsError):
        evaluate([num(1), num(2), op("addition"), num(3), num(4), op("addition")])


def test_grouping_tokens_are_unsupported() -> None:
    """Parentheses and separators cannot appear in postfix input."""
    with pytest.raises(UnsupportedTokenError):
        evaluate([num(1), Token.left_parenthesis()])
    with pytest.raises(UnsupportedTokenError):
        evaluate([num(1), Token.argument_separator(), num(2)])


@pytest.mark.parametrize("postfix,expected", [
    ([num(2), num(3), op("addition")], Integer(value=5)),
    ([num(2), num(3), op("subtraction")], Integer(value=-1)),
    ([num(6), num(7), op("multiplication")], Integer(value=42)),
    ([num(7), num(2), op("division")], Integer(value=3)),
    ([num(-7), num(2), op("division")], Integer(value=-3)),
    ([num(-7), num(2), op("modulus")], Integer(value=-1)),
    ([num(7), num(-2), op("modulus")], Integer(value=1)),
    ([num(5), op("negation")], Integer(value=-5)),
    ([num(5), op("identity")], Integer(value=5)),
    ([num(2), num(10), op("power")], Integer(value=1024)),
    ([num(2), num(10), op("pow")], Integer(value=1024)),
    ([num(5), op("factorial")], Integer(value=120)),
    ([num(0), op("factorial")], Integer(value=1)),
    ([num(-3), op("abs")], Integer(value=3)),
    ([num(4), op("floor")], Integer(value=4)),
    ([num(2), num(3), op("max")], Integer(value=3)),
    ([num(2), num(3), op("min")], Integer(value=2)),
])
def test_integer_arithmetic(postfix, expected) -> None:
    """Integer operands give exact Integer results."""
    assert evaluate(postfix) == expected


@pytest.mark.parametrize("postfix,expected", [
    ([num(2), num("3.5"), op("addition")], Decimal("5.5")),
    ([num("7"), num("2.0"), op("division")], Decimal("3.5")),
    ([num("7.5"), num(2), op("modulus")], Decimal("1.5")),
    ([num(2), num(-1), op("power")], Decimal("0.5")),
    ([num("2.0"), num(3), op("power")], Decimal(8)),
    ([num(4), num("0.5"), op("power")], Decimal(2)),
    ([num("2.7"), op("floor")], Decimal(2)),
    ([num("2.1"), op("ceil")], Decimal(3)),
    ([num("-1.5"), op("abs")], Decimal("1.5")),
    ([num(16), op("sqrt")], Decimal(4)),
    ([num(1000), op("log")], Decimal(3)),
    ([num(0), op("exp")], Decimal(1)),
    ([num(0), op("sin")], Decimal(0)),
    ([num(0), op("cos")], Decimal(1)),
    ([num(2), num("1.5"), op("min")], Decimal("1.5")),
])
def test_real_arithmetic(postfix, expected) -> None:
    """Any Real operand, or a non-integral result, gives a Real."""
    result = evaluate(postfix)
    assert isinstance(result, Real)
    assert result.value == expected


def test_comparisons() -> None:
    """Comparisons promote numbers and always yield Booleans."""
    assert evaluate([num(2), num("3.5"), op("less")]) == Boolean(value=True)
    assert evaluate([num(3), num("3.0"), op("equality")]) == Boolean(value=True)
    assert evaluate([num(3), num(3), op("greater")]) == Boolean(value=False)
    assert evaluate([num(3), num(3), op("greater_equal")]) == Boolean(value=True)
    assert evaluate([boolean(True), boolean(False), op("greater")]) == Boolean(value=True)
    assert evaluate([boolean(True), boolean(True), op("inequality")]) == Boolean(value=False)


def test_comparison_rejects_mixed_boolean() -> None:
    """A Boolean is never compared with a number."""
    with pytest.raises(InvalidOperandTypeError):
        evaluate([num(1), boolean(True), op("equality")])


@pytest.mark.parametrize("name,truth_table", [
    ("and", (False, False, False, True)),
    ("or", (False, True, True, True)),
    ("xor", (False, True, True, False)),
    ("nand", (True, True, True, False)),
    ("nor", (True, False, False, False)),
    ("xnor", (True, False, False, True)),
])
def test_logical_operators(name, truth_table) -> None:
    """Logical operators follow their truth tables."""
    pairs = [(False, False), (False, True), (True, False), (True, True)]
    for (left, right), expected in zip(pairs, truth_table):
        assert evaluate([boolean(left), boolean(right), op(name)]) == Boolean(value=expected)


def test_logical_operators_reject_numbers() -> None:
    """Numbers are not implicitly truthy."""
    with pytest.raises(InvalidOperandTypeError):
        evaluate([num(1), num(2), op("and")])
    with pytest.raises(InvalidOperandTypeError):
        evaluate([num(0), op("not")])
    assert evaluate([boolean(False), op("not")]) == Boolean(value=True)


def test_arithmetic_rejects_booleans() -> None:
    """Booleans do not take part in arithmetic."""
    with pytest.raises(InvalidOperandTypeError):
        evaluate([boolean(True), num(1), op("addition")])


def test_assignment() -> None:
    """Assignment binds the target and yields the Variable itself."""
    table = VariableTable()
    x = Variable(name="x", store=table)

    result = evaluate([Token.operand(x), num(5), op("assignment")])

    assert isinstance(result, Variable)
    assert result.name == "x"
    assert table.lookup("x") == Integer(value=5)


def test_chained_assignment() -> None:
    """x = y = 5 binds both names."""
    table = VariableTable()
    x = Token.operand(Variable(name="x", store=table))
    y = Token.operand(Variable(name="y", store=table))

    evaluate([x, y, num(5), op("assignment"), op("assignment")])

    assert table.lookup("x") == Integer(value=5)
    assert table.lookup("y") == Integer(value=5)


def test_assignment_copies_value() -> None:
    """Assigning one Variable to another copies the current value."""
    table = VariableTable(bindings={"y": Integer(value=1)})
    x = Token.operand(Variable(name="x", store=table))
    y = Token.operand(Variable(name="y", store=table))

    evaluate([x, y, op("assignment")])
    table.bind("y", Integer(value=2))

    assert table.lookup("x") == Integer(value=1)


def test_assignment_to_non_variable() -> None:
    """Only Variables can be assigned to."""
    with pytest.raises(InvalidAssignmentTargetError):
        evaluate([num(1), num(5), op("assignment")])


def test_unbound_variable() -> None:
    """Reading an unbound Variable raises UnboundVariableError."""
    x = Token.operand(Variable(name="x", store=VariableTable()))
    with pytest.raises(UnboundVariableError):
        evaluate([x, num(1), op("addition")])


@pytest.mark.parametrize("postfix", [
    [num(1), num(0), op("division")],
    [num(1), num(0), op("modulus")],
    [num("1.0"), num(0), op("division")],
    [num(0), num(-1), op("power")],
    [num(-8), num("0.5"), op("power")],
    [num(3), op("negation"), op("factorial")],
    [num(-1), op("sqrt")],
    [num(0), op("ln")],
    [num(2), op("arcsin")],
    [num(0), num(0), op("arctan2")],
    [num(10 ** 7), op("exp")],
])
def test_domain_errors(postfix) -> None:
    """Undefined results raise DomainError."""
    with pytest.raises(DomainError):
        evaluate(postfix)


def test_factorial_requires_integer() -> None:
    """Factorial of a Real is rejected."""
    with pytest.raises(InvalidOperandTypeError):
        evaluate([num("2.5"), op("factorial")])


def test_precision() -> None:
    """Real results are rounded to the configured precision."""
    result = evaluate([num(1), num("3.0"), op("division")], EngineConfig(precision=10))
    assert result.value == Decimal("0.3333333333")


def test_power_threshold_does_not_change_results() -> None:
    """Both power algorithms give the same value."""
    postfix = [num(3), num(40), op("power")]
    assert evaluate(postfix, EngineConfig(power_threshold=0)) == evaluate(postfix, EngineConfig(power_threshold=100))


def test_result_reads_history() -> None:
    """result(n) recalls the n-th earlier result."""
    engine = Evaluator(history=(Integer(value=7), Real(value=Decimal("0.5"))))
    assert engine.evaluate([num(1), op("result")]) == Integer(value=7)
    assert engine.evaluate([num(2), op("result")]) == Real(value=Decimal("0.5"))
    with pytest.raises(DomainError):
        engine.evaluate([num(3), op("result")])
    with pytest.raises(DomainError):
        engine.evaluate([num(0), op("result")])


def test_huge_power_of_trivial_base() -> None:
    """1, -1 and 0 raised to a huge exponent have exact results."""
    assert evaluate([num(1), num(10 ** 400), op("power")]) == Integer(value=1)
    assert evaluate([num(-1), num(10 ** 400 + 1), op("power")]) == Integer(value=-1)
    assert evaluate([num(0), num(10 ** 400), op("power")]) == Integer(value=0)


def test_too_large_power() -> None:
    """A power too large to compute is a DomainError, not a Python crash."""
    with pytest.raises(DomainError, match="too large"):
        evaluate([num(2), num(10 ** 400), op("power")])
