"""Stack-based execution of postfix token sequences."""
from decimal import DecimalException, localcontext
from typing import List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from expression_evaluator.common.config import EngineConfig
from expression_evaluator.common.errors import (
    DomainError,
    InsufficientOperandsError,
    TooManyOperandsError,
    UnsupportedTokenError,
)
from expression_evaluator.common.logger import logger
from expression_evaluator.engine.behaviors import BEHAVIORS
from expression_evaluator.engine.catalog import OperationDescriptor
from expression_evaluator.engine.tokens import Token, TokenKind
from expression_evaluator.engine.values import Scalar, Value


class Evaluator(BaseModel):
    """
    Execute a postfix token sequence on a single value stack.

    Lifecycle:
        - Each call to evaluate() owns a fresh stack
        - Real arithmetic runs in a local decimal context at the configured precision
        - Any failure aborts the evaluation; no partial result is returned
    """

    model_config = ConfigDict(frozen=True)

    config: EngineConfig = Field(default_factory=EngineConfig, description="Numeric settings")
    history: Tuple[Scalar, ...] = Field(default=(), description="Earlier results, read by result(n)")

    def evaluate(self, postfix: Sequence[Token]) -> Value:
        """
        Evaluate a postfix expression.

        :param Sequence[Token] postfix: Operand, operator and function tokens in postfix order

        :return: The single value left on the stack
        :rtype: Value
        :raises InsufficientOperandsError: If the sequence is empty or an operation lacks operands
        :raises TooManyOperandsError: If more than one value remains
        :raises UnsupportedTokenError: If a grouping or separator token is present
        """
        if not postfix:
            raise InsufficientOperandsError("Empty expression")

        stack: List[Value] = []
        with localcontext() as context:
            context.prec = self.config.precision
            for token in postfix:
                kind = token.kind
                if kind is TokenKind.OPERAND:
                    stack.append(token.value)
                elif kind in (TokenKind.OPERATOR, TokenKind.FUNCTION):
                    self._apply(token.descriptor, stack)
                else:
                    raise UnsupportedTokenError(f"'{token.name}' cannot appear in a postfix expression")

        if len(stack) != 1:
            raise TooManyOperandsError(f"Expression leaves {len(stack)} values on the stack")
        return stack[0]

    def _apply(self, descriptor: OperationDescriptor, stack: List[Value]) -> None:
        """Pop the operands of one operation, run its behavior and push the result."""
        arity = descriptor.arity
        if len(stack) < arity:
            raise InsufficientOperandsError(
                f"'{descriptor.name}' needs {arity} operand(s) but the stack holds {len(stack)}"
            )
        operands = stack[-arity:]
        del stack[-arity:]

        logger.debug("Applying %s to %d operand(s)", descriptor.behavior.value, arity)
        try:
            result = BEHAVIORS[descriptor.behavior](self, *operands)
        except DecimalException as exc:
            raise DomainError(f"'{descriptor.name}' failed: {exc.__class__.__name__}") from exc
        except (RecursionError, MemoryError, OverflowError) as exc:
            raise DomainError(f"'{descriptor.name}' result is too large to compute") from exc
        stack.append(result)


def evaluate(postfix: Sequence[Token], config: EngineConfig = EngineConfig()) -> Value:
    """Evaluate with a one-off Evaluator."""
    return Evaluator(config=config).evaluate(postfix)
