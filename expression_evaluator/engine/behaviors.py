"""
Routines run by the evaluator, keyed by behavior selector.

Each routine receives the evaluator (for its configuration and result history)
and the popped operands in push order, and returns a fresh value. The concrete
result type follows the operand types:

    - Integer with Integer stays Integer
    - any other numeric pair is computed as Real
    - comparisons always yield Boolean
    - logical operators accept Booleans only
"""
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
import operator
from typing import TYPE_CHECKING, Callable, Dict

from expression_evaluator.common.errors import (
    DomainError,
    InvalidAssignmentTargetError,
    InvalidOperandTypeError,
)
from expression_evaluator.engine import numeric
from expression_evaluator.engine.catalog import Behavior
from expression_evaluator.engine.values import (
    Boolean,
    Integer,
    Real,
    Value,
    Variable,
    dereference,
    make_real,
    promote,
    require_boolean,
    require_number,
    to_decimal,
    to_real,
)

if TYPE_CHECKING:
    from expression_evaluator.engine.evaluator import Evaluator

Handler = Callable[..., Value]


def _arithmetic(name: str, integer_op: Callable[[int, int], int], real_op: Callable[[Decimal, Decimal], Decimal]) -> Handler:
    def handler(engine: "Evaluator", left: Value, right: Value) -> Value:
        left, right = promote(left, right, name)
        if isinstance(left, Integer):
            return Integer(value=integer_op(left.value, right.value))
        return make_real(real_op(left.value, right.value))

    return handler


def _real_divide(dividend: Decimal, divisor: Decimal) -> Decimal:
    if divisor == 0:
        raise DomainError("Division by zero")
    return dividend / divisor


def _real_modulus(dividend: Decimal, divisor: Decimal) -> Decimal:
    if divisor == 0:
        raise DomainError("Modulus by zero")
    return dividend % divisor


def _comparison(name: str, compare: Callable[[object, object], bool]) -> Handler:
    def handler(engine: "Evaluator", left: Value, right: Value) -> Value:
        left, right = dereference(left), dereference(right)
        if isinstance(left, Boolean) and isinstance(right, Boolean):
            return Boolean(value=compare(left.value, right.value))
        if isinstance(left, Boolean) or isinstance(right, Boolean):
            raise InvalidOperandTypeError(f"'{name}' cannot compare a {left.kind} with a {right.kind}")
        left, right = promote(left, right, name)
        return Boolean(value=compare(left.value, right.value))

    return handler


def _logical(name: str, combine: Callable[[bool, bool], bool]) -> Handler:
    def handler(engine: "Evaluator", left: Value, right: Value) -> Value:
        return Boolean(value=combine(require_boolean(left, name), require_boolean(right, name)))

    return handler


def assignment(engine: "Evaluator", target: Value, value: Value) -> Value:
    """Bind the target Variable to the value and yield the Variable itself."""
    if not isinstance(target, Variable):
        raise InvalidAssignmentTargetError(f"Cannot assign to a {target.kind}")
    target.assign(dereference(value))
    return target


def identity(engine: "Evaluator", operand: Value) -> Value:
    return require_number(operand, "identity")


def negation(engine: "Evaluator", operand: Value) -> Value:
    number = require_number(operand, "negation")
    if isinstance(number, Integer):
        return Integer(value=-number.value)
    return make_real(-number.value)


def logical_not(engine: "Evaluator", operand: Value) -> Value:
    return Boolean(value=not require_boolean(operand, "not"))


def factorial(engine: "Evaluator", operand: Value) -> Value:
    number = require_number(operand, "factorial")
    if not isinstance(number, Integer):
        raise InvalidOperandTypeError("'factorial' is defined for Integer operands only")
    return Integer(value=numeric.factorial(number.value))


def power(engine: "Evaluator", base: Value, exponent: Value) -> Value:
    """
    Raise base to exponent.

    Integer ** non-negative Integer stays exact. Everything else, including a
    negative Integer exponent, is computed in Real arithmetic.
    """
    base, exponent = promote(base, exponent, "power")
    threshold = engine.config.power_threshold
    if isinstance(base, Integer):
        if exponent.value >= 0:
            return Integer(value=numeric.select_power(base.value, exponent.value, threshold))
        return make_real(numeric.real_power(to_decimal(base), to_decimal(exponent), threshold))
    return make_real(numeric.real_power(base.value, exponent.value, threshold))


def absolute(engine: "Evaluator", operand: Value) -> Value:
    number = require_number(operand, "abs")
    if isinstance(number, Integer):
        return Integer(value=abs(number.value))
    return make_real(abs(number.value))


def _rounding(name: str, rounding: str) -> Handler:
    def handler(engine: "Evaluator", operand: Value) -> Value:
        number = require_number(operand, name)
        if isinstance(number, Integer):
            return number
        return make_real(number.value.to_integral_value(rounding=rounding))

    return handler


def _extremum(name: str, pick: Callable) -> Handler:
    def handler(engine: "Evaluator", left: Value, right: Value) -> Value:
        left, right = promote(left, right, name)
        return pick(left, right, key=lambda number: number.value)

    return handler


def _decimal_function(name: str, function: Callable[[Decimal], Decimal]) -> Handler:
    def handler(engine: "Evaluator", operand: Value) -> Value:
        return make_real(function(to_real(operand, name).value))

    return handler


def _guarded_function(name: str, function: Callable[..., Decimal]) -> Handler:
    """Wrap an mpmath-backed routine, passing the configured guard digits."""

    def handler(engine: "Evaluator", *operands: Value) -> Value:
        arguments = [to_real(operand, name).value for operand in operands]
        return make_real(function(*arguments, guard_digits=engine.config.guard_digits))

    return handler


def result(engine: "Evaluator", operand: Value) -> Value:
    """Recall the n-th (1-based) earlier result of the session."""
    index = require_number(operand, "result")
    if not isinstance(index, Integer):
        raise InvalidOperandTypeError("'result' expects an Integer index")
    history = engine.history
    if not 1 <= index.value <= len(history):
        raise DomainError(f"No result #{index.value}; {len(history)} result(s) recorded")
    return history[index.value - 1]


BEHAVIORS: Dict[Behavior, Handler] = {
    Behavior.ASSIGNMENT: assignment,
    Behavior.OR: _logical("or", operator.or_),
    Behavior.NOR: _logical("nor", lambda a, b: not (a or b)),
    Behavior.XOR: _logical("xor", operator.xor),
    Behavior.XNOR: _logical("xnor", operator.eq),
    Behavior.AND: _logical("and", operator.and_),
    Behavior.NAND: _logical("nand", lambda a, b: not (a and b)),
    Behavior.EQUALITY: _comparison("equality", operator.eq),
    Behavior.INEQUALITY: _comparison("inequality", operator.ne),
    Behavior.LESS: _comparison("less", operator.lt),
    Behavior.LESS_EQUAL: _comparison("less_equal", operator.le),
    Behavior.GREATER: _comparison("greater", operator.gt),
    Behavior.GREATER_EQUAL: _comparison("greater_equal", operator.ge),
    Behavior.ADDITION: _arithmetic("addition", operator.add, operator.add),
    Behavior.SUBTRACTION: _arithmetic("subtraction", operator.sub, operator.sub),
    Behavior.MULTIPLICATION: _arithmetic("multiplication", operator.mul, operator.mul),
    Behavior.DIVISION: _arithmetic("division", numeric.truncated_divide, _real_divide),
    Behavior.MODULUS: _arithmetic("modulus", numeric.truncated_modulus, _real_modulus),
    Behavior.IDENTITY: identity,
    Behavior.NEGATION: negation,
    Behavior.NOT: logical_not,
    Behavior.POWER: power,
    Behavior.FACTORIAL: factorial,
    Behavior.ABS: absolute,
    Behavior.ARCCOS: _guarded_function("arccos", numeric.arccos),
    Behavior.ARCSIN: _guarded_function("arcsin", numeric.arcsin),
    Behavior.ARCTAN: _guarded_function("arctan", numeric.arctan),
    Behavior.ARCTAN2: _guarded_function("arctan2", numeric.arctan2),
    Behavior.CEIL: _rounding("ceil", ROUND_CEILING),
    Behavior.COS: _guarded_function("cos", numeric.cos),
    Behavior.EXP: _decimal_function("exp", numeric.exp),
    Behavior.FLOOR: _rounding("floor", ROUND_FLOOR),
    Behavior.LB: _guarded_function("lb", numeric.lb),
    Behavior.LN: _decimal_function("ln", numeric.ln),
    Behavior.LOG: _decimal_function("log", numeric.log10),
    Behavior.MAX: _extremum("max", max),
    Behavior.MIN: _extremum("min", min),
    Behavior.RESULT: result,
    Behavior.SIN: _guarded_function("sin", numeric.sin),
    Behavior.SQRT: _decimal_function("sqrt", numeric.sqrt),
    Behavior.TAN: _guarded_function("tan", numeric.tan),
}
