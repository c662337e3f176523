"""
Runtime values carried by operand tokens, and the promotion rules between them.

Values form a closed tagged union discriminated by ``kind``:

    - Integer: arbitrary-precision signed integer
    - Real: arbitrary-precision decimal, rounded to the working precision
    - Boolean: true/false
    - Variable: a named binding living in a variable store

Every helper that inspects operand types handles all four variants explicitly and
rejects anything it cannot accept with InvalidOperandTypeError.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

from expression_evaluator.common.config import DEFAULT_PRECISION
from expression_evaluator.common.errors import (
    DomainError,
    InvalidOperandTypeError,
    UnboundVariableError,
)


class Integer(BaseModel):
    """Exact integer value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["integer"] = "integer"
    value: StrictInt = Field(..., description="Arbitrary-precision integer payload")

    def to_text(self, places: Optional[int] = None) -> str:
        """Render as an exact decimal integer string."""
        return str(self.value)


class Real(BaseModel):
    """Arbitrary-precision decimal value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["real"] = "real"
    value: Decimal = Field(..., description="Finite decimal payload")

    def to_text(self, places: Optional[int] = None) -> str:
        """
        Render fixed-point.

        :param places: Digits after the decimal point, DEFAULT_PRECISION when omitted;
            callers holding an EngineConfig pass its precision

        :return: Fixed-point text
        :rtype: str
        """
        if places is None:
            places = DEFAULT_PRECISION
        return f"{self.value:.{places}f}"


class Boolean(BaseModel):
    """Truth value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["boolean"] = "boolean"
    value: StrictBool

    def to_text(self, places: Optional[int] = None) -> str:
        return "True" if self.value else "False"


Scalar = Annotated[Union[Integer, Real, Boolean], Field(discriminator="kind")]


class VariableStore(ABC):
    """Name -> value table a Variable reads from and writes to."""

    @abstractmethod
    def lookup(self, name: str) -> Optional[Scalar]:
        """Return the value bound to ``name``, or None when unbound."""

    @abstractmethod
    def bind(self, name: str, value: Scalar) -> None:
        """Replace the value bound to ``name``."""


class Variable(BaseModel):
    """
    Named mutable binding.

    The Variable itself holds no payload: reads and writes go through its store,
    so every Variable with the same name and store sees the same binding.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["variable"] = "variable"
    name: str = Field(..., min_length=1)
    store: VariableStore = Field(..., repr=False, exclude=True)

    def dereference(self) -> Scalar:
        """
        Read the currently bound value.

        :return: Bound value
        :raises UnboundVariableError: If nothing is bound to the name
        """
        value = self.store.lookup(self.name)
        if value is None:
            raise UnboundVariableError(f"Variable '{self.name}' has no value")
        return value

    def assign(self, value: Scalar) -> None:
        self.store.bind(self.name, value)

    def to_text(self, places: Optional[int] = None) -> str:
        return self.dereference().to_text(places)


Value = Annotated[Union[Integer, Real, Boolean, Variable], Field(discriminator="kind")]


def make_real(value: Decimal) -> Real:
    """
    Wrap a computed decimal, rejecting infinities and NaNs.

    :param Decimal value: Computed decimal

    :return: Real value
    :rtype: Real
    :raises DomainError: If the value is not finite
    """
    if not value.is_finite():
        raise DomainError(f"Result is not a finite number: {value}")
    return Real(value=value)


def dereference(value: Value) -> Scalar:
    """Replace a Variable by its bound value; other values are returned unchanged."""
    if isinstance(value, Variable):
        return value.dereference()
    if isinstance(value, (Integer, Real, Boolean)):
        return value
    raise InvalidOperandTypeError(f"Unknown value type: {type(value).__name__}")


def require_number(value: Value, operation: str) -> Union[Integer, Real]:
    """
    Dereference ``value`` and check that it is numeric.

    :raises InvalidOperandTypeError: If the value is a Boolean
    """
    value = dereference(value)
    if isinstance(value, (Integer, Real)):
        return value
    raise InvalidOperandTypeError(f"'{operation}' expects a number, got a {value.kind}")


def require_boolean(value: Value, operation: str) -> bool:
    """
    Dereference ``value`` and return its truth value.

    :raises InvalidOperandTypeError: If the value is a number
    """
    value = dereference(value)
    if isinstance(value, Boolean):
        return value.value
    raise InvalidOperandTypeError(f"'{operation}' expects a Boolean, got a {value.kind}")


def to_decimal(value: Union[Integer, Real]) -> Decimal:
    """Coerce a number to a decimal rounded to the current working precision."""
    if isinstance(value, Integer):
        return +Decimal(value.value)
    return value.value


def to_real(value: Value, operation: str) -> Real:
    """Dereference, check and coerce a value to Real."""
    number = require_number(value, operation)
    if isinstance(number, Real):
        return number
    return Real(value=to_decimal(number))


def promote(left: Value, right: Value, operation: str) -> Union[tuple[Integer, Integer], tuple[Real, Real]]:
    """
    Bring two numeric operands to a common type.

    Two Integers stay Integer; any other numeric pair is coerced to Real.

    :param Value left: Left-hand operand
    :param Value right: Right-hand operand
    :param str operation: Operation name used in error messages

    :return: Both operands as Integer, or both as Real
    :raises InvalidOperandTypeError: If either operand is a Boolean
    """
    left = require_number(left, operation)
    right = require_number(right, operation)
    if isinstance(left, Integer) and isinstance(right, Integer):
        return left, right
    return Real(value=to_decimal(left)), Real(value=to_decimal(right))
