"""Tokens flowing from the lexer through the converter to the evaluator."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from expression_evaluator.engine.catalog import OperationDescriptor, lookup
from expression_evaluator.engine.values import Value, Variable

LEFT_PARENTHESIS = "left_parenthesis"
RIGHT_PARENTHESIS = "right_parenthesis"
ARGUMENT_SEPARATOR = "argument_separator"


class TokenKind(str, Enum):
    OPERAND = "operand"
    OPERATOR = "operator"
    FUNCTION = "function"
    LEFT_PARENTHESIS = LEFT_PARENTHESIS
    RIGHT_PARENTHESIS = RIGHT_PARENTHESIS
    ARGUMENT_SEPARATOR = ARGUMENT_SEPARATOR


_STRUCTURAL = {
    LEFT_PARENTHESIS: TokenKind.LEFT_PARENTHESIS,
    RIGHT_PARENTHESIS: TokenKind.RIGHT_PARENTHESIS,
    ARGUMENT_SEPARATOR: TokenKind.ARGUMENT_SEPARATOR,
}


class Token(BaseModel):
    """
    One unit of an expression.

    A token carrying a value is an operand. Otherwise its name is either a
    grouping marker or a key of the operation catalog, which decides whether it
    is an operator or a function.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Stable symbolic name")
    value: Optional[Value] = Field(default=None, description="Operand payload")

    @classmethod
    def operand(cls, value: Value) -> "Token":
        name = value.name if isinstance(value, Variable) else value.kind
        return cls(name=name, value=value)

    @classmethod
    def operation(cls, name: str) -> "Token":
        return cls(name=name)

    @classmethod
    def left_parenthesis(cls) -> "Token":
        return cls(name=LEFT_PARENTHESIS)

    @classmethod
    def right_parenthesis(cls) -> "Token":
        return cls(name=RIGHT_PARENTHESIS)

    @classmethod
    def argument_separator(cls) -> "Token":
        return cls(name=ARGUMENT_SEPARATOR)

    @property
    def kind(self) -> TokenKind:
        """
        Classify the token.

        :raises UnknownTokenError: If the name is neither structural nor in the catalog
        """
        if self.value is not None:
            return TokenKind.OPERAND
        if self.name in _STRUCTURAL:
            return _STRUCTURAL[self.name]
        if self.descriptor.is_function:
            return TokenKind.FUNCTION
        return TokenKind.OPERATOR

    @property
    def descriptor(self) -> OperationDescriptor:
        return lookup(self.name)

    def __str__(self) -> str:
        if self.value is None:
            return self.name
        if isinstance(self.value, Variable):
            return self.value.name
        return self.value.to_text(places=6)
