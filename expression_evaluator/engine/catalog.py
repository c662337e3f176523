"""
Operation catalog: one immutable descriptor per operator and function kind.

The catalog is fixed data. A token name is either an operand, a grouping marker,
or a key of CATALOG; there is no other membership list.
"""
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from expression_evaluator.common.errors import UnknownTokenError


class Precedence(IntEnum):
    """Operator precedence levels, lowest first."""

    ASSIGNMENT = 1
    LOGOR = 2
    LOGXOR = 3
    LOGAND = 4
    BITOR = 5
    BITXOR = 6
    BITAND = 7
    EQUALITY = 8
    RELATIONAL = 9
    BITSHIFT = 10
    ADDITIVE = 11
    MULTIPLICATIVE = 12
    UNARY = 13
    POWER = 14
    POSTFIX = 15


class Associativity(str, Enum):
    LEFT = "Left"
    RIGHT = "Right"
    NONE = "None"


class OperationKind(str, Enum):
    OPERATOR = "operator"
    FUNCTION = "function"


class Behavior(str, Enum):
    """Selector naming the routine the evaluator runs for an operation."""

    ASSIGNMENT = "assignment"
    OR = "or"
    NOR = "nor"
    XOR = "xor"
    XNOR = "xnor"
    AND = "and"
    NAND = "nand"
    EQUALITY = "equality"
    INEQUALITY = "inequality"
    LESS = "less"
    LESS_EQUAL = "less_equal"
    GREATER = "greater"
    GREATER_EQUAL = "greater_equal"
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"
    MODULUS = "modulus"
    IDENTITY = "identity"
    NEGATION = "negation"
    NOT = "not"
    POWER = "power"
    FACTORIAL = "factorial"
    ABS = "abs"
    ARCCOS = "arccos"
    ARCSIN = "arcsin"
    ARCTAN = "arctan"
    ARCTAN2 = "arctan2"
    CEIL = "ceil"
    COS = "cos"
    EXP = "exp"
    FLOOR = "floor"
    LB = "lb"
    LN = "ln"
    LOG = "log"
    MAX = "max"
    MIN = "min"
    RESULT = "result"
    SIN = "sin"
    SQRT = "sqrt"
    TAN = "tan"


class OperationDescriptor(BaseModel):
    """Arity, precedence, associativity and behavior of one operation kind."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Symbolic token name")
    kind: OperationKind
    arity: int = Field(..., ge=1, le=3)
    precedence: Optional[Precedence] = Field(default=None, description="Operators only")
    associativity: Associativity = Associativity.NONE
    behavior: Behavior

    @model_validator(mode="after")
    def check_operator_fields(self) -> "OperationDescriptor":
        """Operators carry a precedence and at most two operands; functions carry neither."""
        if self.kind is OperationKind.OPERATOR:
            if self.precedence is None:
                raise ValueError(f"Operator '{self.name}' needs a precedence")
            if self.arity > 2:
                raise ValueError(f"Operator '{self.name}' cannot take {self.arity} operands")
        elif self.precedence is not None or self.associativity is not Associativity.NONE:
            raise ValueError(f"Function '{self.name}' takes no precedence or associativity")
        return self

    @property
    def is_operator(self) -> bool:
        return self.kind is OperationKind.OPERATOR

    @property
    def is_function(self) -> bool:
        return self.kind is OperationKind.FUNCTION


def _operator(
    name: str,
    arity: int,
    precedence: Precedence,
    associativity: Associativity,
    behavior: Optional[Behavior] = None,
) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        kind=OperationKind.OPERATOR,
        arity=arity,
        precedence=precedence,
        associativity=associativity,
        behavior=behavior or Behavior(name),
    )


def _function(name: str, arity: int, behavior: Optional[Behavior] = None) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        kind=OperationKind.FUNCTION,
        arity=arity,
        behavior=behavior or Behavior(name),
    )


_L, _R, _N = Associativity.LEFT, Associativity.RIGHT, Associativity.NONE

_DESCRIPTORS = (
    _operator("assignment", 2, Precedence.ASSIGNMENT, _R),
    _operator("or", 2, Precedence.LOGOR, _L),
    _operator("nor", 2, Precedence.LOGOR, _L),
    _operator("xor", 2, Precedence.LOGOR, _L),
    _operator("xnor", 2, Precedence.LOGOR, _L),
    _operator("and", 2, Precedence.LOGAND, _L),
    _operator("nand", 2, Precedence.LOGAND, _L),
    _operator("equality", 2, Precedence.EQUALITY, _L),
    _operator("inequality", 2, Precedence.EQUALITY, _L),
    _operator("less", 2, Precedence.RELATIONAL, _L),
    _operator("less_equal", 2, Precedence.RELATIONAL, _L),
    _operator("greater", 2, Precedence.RELATIONAL, _L),
    _operator("greater_equal", 2, Precedence.RELATIONAL, _L),
    _operator("addition", 2, Precedence.ADDITIVE, _L),
    _operator("subtraction", 2, Precedence.ADDITIVE, _L),
    _operator("multiplication", 2, Precedence.MULTIPLICATIVE, _L),
    _operator("division", 2, Precedence.MULTIPLICATIVE, _L),
    _operator("modulus", 2, Precedence.MULTIPLICATIVE, _L),
    _operator("identity", 1, Precedence.UNARY, _N),
    _operator("negation", 1, Precedence.UNARY, _N),
    _operator("not", 1, Precedence.UNARY, _N),
    _operator("power", 2, Precedence.POWER, _R),
    _operator("factorial", 1, Precedence.POSTFIX, _N),
    _function("abs", 1),
    _function("arccos", 1),
    _function("arcsin", 1),
    _function("arctan", 1),
    _function("ceil", 1),
    _function("cos", 1),
    _function("exp", 1),
    _function("floor", 1),
    _function("lb", 1),
    _function("ln", 1),
    _function("log", 1),
    _function("result", 1),
    _function("sin", 1),
    _function("sqrt", 1),
    _function("tan", 1),
    _function("arctan2", 2),
    _function("max", 2),
    _function("min", 2),
    _function("pow", 2, Behavior.POWER),
)

CATALOG: Mapping[str, OperationDescriptor] = MappingProxyType(
    {descriptor.name: descriptor for descriptor in _DESCRIPTORS}
)

FUNCTION_NAMES = frozenset(name for name, descriptor in CATALOG.items() if descriptor.is_function)


def lookup(name: str) -> OperationDescriptor:
    """
    Find the descriptor of an operation.

    :param str name: Symbolic token name

    :return: Operation descriptor
    :rtype: OperationDescriptor
    :raises UnknownTokenError: If the name is not in the catalog
    """
    try:
        return CATALOG[name]
    except KeyError:
        raise UnknownTokenError(f"Unknown token: '{name}'") from None
