"""
Numeric algorithms behind the arithmetic behaviors.

Integer routines work on Python ints. Real routines work on ``Decimal`` and round to
the precision of the active decimal context, which the evaluator sets for the
duration of one evaluation. Functions the decimal module does not provide
(trigonometry, binary logarithm) are computed with mpmath at the same precision
plus a few guard digits, then rounded back into a Decimal.
"""
from decimal import Decimal, getcontext
import math
from typing import Callable, TypeVar

import mpmath

from expression_evaluator.common.errors import DomainError

Number = TypeVar("Number", int, Decimal)


def simple_power(base: Number, exponent: int) -> Number:
    """
    Raise ``base`` to a non-negative integer power by repeated multiplication.

    :param base: Integer or decimal base
    :param int exponent: Non-negative exponent

    :return: base ** exponent
    """
    product = type(base)(1)
    for _ in range(exponent):
        product *= base
    return product


def fast_power(base: Number, exponent: int) -> Number:
    """
    Raise ``base`` to a non-negative integer power by recursive squaring.

    :param base: Integer or decimal base
    :param int exponent: Non-negative exponent

    :return: base ** exponent
    """
    if exponent == 0:
        return type(base)(1)
    half = fast_power(base, exponent // 2)
    if exponent % 2 == 0:
        return half * half
    return half * half * base


def select_power(base: Number, exponent: int, threshold: int) -> Number:
    """
    Pick repeated multiplication up to ``threshold``, squaring above it.

    Bases 0, 1 and -1 are answered directly, whatever the size of the exponent.
    """
    if base == 0 and exponent > 0:
        return type(base)(0)
    if base == 1 or (base == -1 and exponent % 2 == 0):
        return type(base)(1)
    if base == -1:
        return type(base)(-1)
    if exponent <= threshold:
        return simple_power(base, exponent)
    return fast_power(base, exponent)


def real_power(base: Decimal, exponent: Decimal, threshold: int) -> Decimal:
    """
    Raise a decimal to a decimal power.

    Integral exponents reuse the integer algorithms in decimal arithmetic; a
    negative integral exponent gives the reciprocal of the positive power.
    Fractional exponents go through the general decimal power.

    :raises DomainError: For zero to a negative power or a negative base with a fractional exponent
    """
    if exponent == exponent.to_integral_value():
        count = int(exponent)
        if count >= 0:
            return select_power(base, count, threshold)
        if base == 0:
            raise DomainError("Zero cannot be raised to a negative power")
        return Decimal(1) / select_power(base, -count, threshold)
    if base < 0:
        raise DomainError(f"Negative base {base} cannot be raised to a fractional power")
    return base ** exponent


def truncated_divide(dividend: int, divisor: int) -> int:
    """Integer quotient rounded toward zero."""
    if divisor == 0:
        raise DomainError("Division by zero")
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


def truncated_modulus(dividend: int, divisor: int) -> int:
    """Remainder of the truncated division; takes the sign of the dividend."""
    if divisor == 0:
        raise DomainError("Modulus by zero")
    return dividend - divisor * truncated_divide(dividend, divisor)


def factorial(value: int) -> int:
    if value < 0:
        raise DomainError(f"Factorial is undefined for negative integers: {value}")
    return math.factorial(value)


def _to_mpf(value: Decimal) -> mpmath.mpf:
    numerator, denominator = value.as_integer_ratio()
    return mpmath.mpf(numerator) / denominator


def transcendental(function: Callable[..., mpmath.mpf], *arguments: Decimal, guard_digits: int = 10) -> Decimal:
    """
    Evaluate an mpmath function at the working precision.

    :param function: mpmath function taking mpf arguments
    :param arguments: Decimal arguments
    :param int guard_digits: Extra digits carried during the mpmath computation

    :return: Result rounded to the working precision
    :rtype: Decimal
    """
    precision = getcontext().prec
    with mpmath.workdps(precision + guard_digits):
        result = function(*(_to_mpf(argument) for argument in arguments))
        text = mpmath.nstr(result, precision)
    return +Decimal(text)


def pi(guard_digits: int = 10) -> Decimal:
    return transcendental(lambda: +mpmath.pi, guard_digits=guard_digits)


def euler(guard_digits: int = 10) -> Decimal:
    return transcendental(lambda: +mpmath.e, guard_digits=guard_digits)


def sqrt(value: Decimal) -> Decimal:
    if value < 0:
        raise DomainError(f"Square root of a negative number: {value}")
    return value.sqrt()


def _require_positive(value: Decimal, name: str) -> None:
    if value <= 0:
        raise DomainError(f"{name} is undefined for non-positive arguments: {value}")


def ln(value: Decimal) -> Decimal:
    _require_positive(value, "ln")
    return value.ln()


def log10(value: Decimal) -> Decimal:
    _require_positive(value, "log")
    return value.log10()


def lb(value: Decimal, guard_digits: int = 10) -> Decimal:
    _require_positive(value, "lb")
    return transcendental(lambda x: mpmath.log(x, 2), value, guard_digits=guard_digits)


def exp(value: Decimal) -> Decimal:
    return value.exp()


def sin(value: Decimal, guard_digits: int = 10) -> Decimal:
    return transcendental(mpmath.sin, value, guard_digits=guard_digits)


def cos(value: Decimal, guard_digits: int = 10) -> Decimal:
    return transcendental(mpmath.cos, value, guard_digits=guard_digits)


def tan(value: Decimal, guard_digits: int = 10) -> Decimal:
    return transcendental(mpmath.tan, value, guard_digits=guard_digits)


def _require_unit_interval(value: Decimal, name: str) -> None:
    if abs(value) > 1:
        raise DomainError(f"{name} is undefined outside [-1, 1]: {value}")


def arcsin(value: Decimal, guard_digits: int = 10) -> Decimal:
    _require_unit_interval(value, "arcsin")
    return transcendental(mpmath.asin, value, guard_digits=guard_digits)


def arccos(value: Decimal, guard_digits: int = 10) -> Decimal:
    _require_unit_interval(value, "arccos")
    return transcendental(mpmath.acos, value, guard_digits=guard_digits)


def arctan(value: Decimal, guard_digits: int = 10) -> Decimal:
    return transcendental(mpmath.atan, value, guard_digits=guard_digits)


def arctan2(y: Decimal, x: Decimal, guard_digits: int = 10) -> Decimal:
    if y == 0 and x == 0:
        raise DomainError("arctan2 is undefined at the origin")
    return transcendental(mpmath.atan2, y, x, guard_digits=guard_digits)
