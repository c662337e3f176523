"""One-off parsing and evaluation of expression text."""
from typing import List

from expression_evaluator.engine.converter import Converter
from expression_evaluator.engine.tokens import Token
from expression_evaluator.engine.values import Scalar, dereference
from expression_evaluator.frontend.lexer import Lexer
from expression_evaluator.frontend.session import Session


class ExpressionParser:
    """
    Parse and evaluate arithmetic/logical expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Exact Integer arithmetic, Real arithmetic at a fixed working precision

    Algorithm:
        1. Tokenize the text
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack

    Each call uses a fresh session: variables do not survive between calls.
    Use Session directly to keep variables and results across expressions.
    """

    @staticmethod
    def tokenize(expr: str) -> List[Token]:
        """
        Split an expression into tokens.

        :param str expr: Expression text

        :return: List of tokens
        :rtype: List[Token]
        """
        return Lexer().tokenize(expr)

    @staticmethod
    def to_rpn(tokens: List[Token]) -> List[Token]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN).

        :param List[Token] tokens: Tokens in infix order

        :return: List of tokens in RPN order
        :rtype: List[Token]
        """
        return Converter.convert(tokens)

    @staticmethod
    def evaluate(expr: str) -> Scalar:
        """
        Evaluate an expression.

        :param str expr: Expression text

        :return: Computed value; an assignment yields the assigned value
        :rtype: Scalar
        :raises EvaluationError: If the expression is invalid or malformed
        """
        return dereference(Session().evaluate(expr))
