"""Error taxonomy raised while converting and evaluating expressions."""
from enum import Enum


class ErrorKind(str, Enum):
    """Distinguishable failure kinds surfaced to the caller."""

    UNKNOWN_TOKEN = "UnknownToken"
    MISMATCHED_PARENTHESIS = "MismatchedParenthesis"
    INSUFFICIENT_OPERANDS = "InsufficientOperands"
    TOO_MANY_OPERANDS = "TooManyOperands"
    INVALID_ASSIGNMENT_TARGET = "InvalidAssignmentTarget"
    UNBOUND_VARIABLE = "UnboundVariable"
    DOMAIN_ERROR = "DomainError"
    UNSUPPORTED_TOKEN = "UnsupportedToken"
    INVALID_OPERAND_TYPE = "InvalidOperandType"


class EvaluationError(ValueError):
    """
    Base class of every conversion or evaluation failure.

    :param str message: Human-readable description of the failure
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class UnknownTokenError(EvaluationError):
    kind = ErrorKind.UNKNOWN_TOKEN


class MismatchedParenthesisError(EvaluationError):
    kind = ErrorKind.MISMATCHED_PARENTHESIS


class InsufficientOperandsError(EvaluationError):
    kind = ErrorKind.INSUFFICIENT_OPERANDS


class TooManyOperandsError(EvaluationError):
    kind = ErrorKind.TOO_MANY_OPERANDS


class InvalidAssignmentTargetError(EvaluationError):
    kind = ErrorKind.INVALID_ASSIGNMENT_TARGET


class UnboundVariableError(EvaluationError):
    kind = ErrorKind.UNBOUND_VARIABLE


class DomainError(EvaluationError):
    kind = ErrorKind.DOMAIN_ERROR


class UnsupportedTokenError(EvaluationError):
    kind = ErrorKind.UNSUPPORTED_TOKEN


class InvalidOperandTypeError(EvaluationError):
    kind = ErrorKind.INVALID_OPERAND_TYPE
