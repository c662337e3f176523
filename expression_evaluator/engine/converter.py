"""Infix to postfix conversion."""
from typing import List, Sequence

from expression_evaluator.common.errors import MismatchedParenthesisError
from expression_evaluator.common.logger import logger
from expression_evaluator.engine.catalog import Associativity
from expression_evaluator.engine.tokens import Token, TokenKind


class Converter:
    """
    Convert an infix token sequence into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

    Operands go straight to the output. Operators wait on a pending stack until an
    operator that binds less tightly arrives; parentheses fence the pending stack.
    Functions wait on the pending stack, without ever being compared by precedence,
    until the right parenthesis closing their argument list emits them.

    Examples:
        - Infix: 3 + 4 * 2           RPN: 3 4 2 * +
        - Infix: 2 ^ 3 ^ 2           RPN: 2 3 2 ^ ^
        - Infix: max(1, 2 + 3) * 4   RPN: 1 2 3 + max 4 *
    """

    @staticmethod
    def _pops_before(op: Token, top: Token) -> bool:
        """
        Decide whether pending operator ``top`` is emitted before ``op`` is pushed.

        Left-associative operators pop equal precedence (left-to-right grouping),
        right-associative ones do not (right-to-left grouping). Prefix and postfix
        operators never pop.
        """
        if top.kind is not TokenKind.OPERATOR:
            return False
        current, pending = op.descriptor, top.descriptor
        if current.associativity is Associativity.LEFT:
            return current.precedence <= pending.precedence
        if current.associativity is Associativity.RIGHT:
            return current.precedence < pending.precedence
        return False

    @staticmethod
    def convert(tokens: Sequence[Token]) -> List[Token]:
        """
        Convert infix tokens to postfix order.

        :param Sequence[Token] tokens: Tokens in infix order

        :return: Tokens in postfix order, with no grouping or separator tokens
        :rtype: List[Token]
        :raises MismatchedParenthesisError: If the parentheses are unbalanced
        :raises UnknownTokenError: If a token name is not in the operation catalog
        """
        output: List[Token] = []
        pending: List[Token] = []

        for token in tokens:
            kind = token.kind
            if kind is TokenKind.OPERAND:
                output.append(token)
            elif kind in (TokenKind.FUNCTION, TokenKind.LEFT_PARENTHESIS):
                pending.append(token)
            elif kind is TokenKind.RIGHT_PARENTHESIS:
                while pending and pending[-1].kind is not TokenKind.LEFT_PARENTHESIS:
                    output.append(pending.pop())
                if not pending:
                    raise MismatchedParenthesisError("Right parenthesis without a matching left parenthesis")
                pending.pop()
                # A function directly under the parenthesis owns the argument list just closed
                if pending and pending[-1].kind is TokenKind.FUNCTION:
                    output.append(pending.pop())
            elif kind is TokenKind.ARGUMENT_SEPARATOR:
                while pending and pending[-1].kind is not TokenKind.LEFT_PARENTHESIS:
                    output.append(pending.pop())
                if not pending:
                    raise MismatchedParenthesisError("Argument separator outside of parentheses")
            else:
                while pending and Converter._pops_before(token, pending[-1]):
                    output.append(pending.pop())
                pending.append(token)

        # Append remaining operators in reverse order (stack top first)
        for token in reversed(pending):
            if token.kind is TokenKind.LEFT_PARENTHESIS:
                raise MismatchedParenthesisError("Left parenthesis is never closed")
            output.append(token)

        logger.debug("Converted %d infix tokens to postfix: %s", len(tokens), " ".join(map(str, output)))
        return output


def convert(tokens: Sequence[Token]) -> List[Token]:
    """Module-level shortcut for Converter.convert."""
    return Converter.convert(tokens)
