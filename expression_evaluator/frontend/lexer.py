"""Split expression text into typed tokens."""
from decimal import Decimal, localcontext
import re
from typing import List, Optional

from pydantic import BaseModel, Field

from expression_evaluator.common.config import EngineConfig
from expression_evaluator.common.errors import UnknownTokenError
from expression_evaluator.common.logger import logger
from expression_evaluator.engine import numeric
from expression_evaluator.engine.catalog import CATALOG, FUNCTION_NAMES, Precedence
from expression_evaluator.engine.tokens import Token, TokenKind
from expression_evaluator.engine.values import Boolean, Integer, Real, Variable
from expression_evaluator.frontend.variables import VariableTable

_TOKEN_PATTERN = re.compile(
    r"(?P<space>\s+)"
    r"|(?P<number>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<word>[A-Za-z_][A-Za-z_0-9]*)"
    r"|(?P<symbol>\*\*|==|!=|<=|>=|[-+*/%^!<>=(),])"
    r"|(?P<mismatch>.)"
)

_INTEGER_PATTERN = re.compile(r"\d+")

# Symbols whose meaning does not depend on context
SYMBOLS = {
    "=": "assignment",
    "==": "equality",
    "!=": "inequality",
    "<": "less",
    "<=": "less_equal",
    ">": "greater",
    ">=": "greater_equal",
    "*": "multiplication",
    "/": "division",
    "%": "modulus",
    "^": "power",
    "**": "power",
    "!": "factorial",
}

WORD_OPERATORS = frozenset({"and", "or", "xor", "nand", "nor", "xnor", "not"})

# Prefix form, binary form
SIGNS = {"+": ("identity", "addition"), "-": ("negation", "subtraction")}


class Lexer(BaseModel):
    """
    Tokenize expression text.

    Numbers without a fraction or exponent become Integer operands, other numbers
    Real operands. ``true``/``false`` are Booleans, ``pi``/``e`` are Real
    constants, catalog names are functions or word operators, and any other
    identifier is a Variable of the shared variable table.
    """

    config: EngineConfig = Field(default_factory=EngineConfig)
    variables: VariableTable = Field(default_factory=VariableTable)

    def tokenize(self, text: str) -> List[Token]:
        """
        Split an expression into tokens.

        :param str text: Expression text, e.g. "x = 2 * (3 + 4)"

        :return: Tokens in infix order
        :rtype: List[Token]
        :raises UnknownTokenError: If the text holds a character no token starts with
        """
        tokens: List[Token] = []
        for match in _TOKEN_PATTERN.finditer(text):
            group, lexeme = match.lastgroup, match.group()
            if group == "space":
                continue
            if group == "mismatch":
                raise UnknownTokenError(f"Unexpected character '{lexeme}' at position {match.start()}")
            previous = tokens[-1] if tokens else None
            if group == "number":
                tokens.append(self._number(lexeme))
            elif group == "word":
                tokens.append(self._word(lexeme))
            else:
                tokens.append(self._symbol(lexeme, previous))

        logger.debug("Tokenized %r into %d tokens", text, len(tokens))
        return tokens

    @staticmethod
    def _number(lexeme: str) -> Token:
        if _INTEGER_PATTERN.fullmatch(lexeme):
            return Token.operand(Integer(value=int(lexeme)))
        return Token.operand(Real(value=Decimal(lexeme)))

    def _word(self, lexeme: str) -> Token:
        word = lexeme.lower()
        if word in ("true", "false"):
            return Token.operand(Boolean(value=word == "true"))
        if word in ("pi", "e"):
            return Token.operand(Real(value=self._constant(word)))
        if word in WORD_OPERATORS or word in FUNCTION_NAMES:
            return Token.operation(CATALOG[word].name)
        return Token.operand(Variable(name=lexeme, store=self.variables))

    def _constant(self, word: str) -> Decimal:
        with localcontext() as context:
            context.prec = self.config.precision
            if word == "pi":
                return numeric.pi(self.config.guard_digits)
            return numeric.euler(self.config.guard_digits)

    @staticmethod
    def _expects_operand(previous: Optional[Token]) -> bool:
        """True when the next token starts an operand, so a sign there is a prefix operator."""
        if previous is None:
            return True
        kind = previous.kind
        if kind is TokenKind.OPERATOR:
            return previous.descriptor.precedence is not Precedence.POSTFIX
        return kind in (TokenKind.FUNCTION, TokenKind.LEFT_PARENTHESIS, TokenKind.ARGUMENT_SEPARATOR)

    def _symbol(self, lexeme: str, previous: Optional[Token]) -> Token:
        if lexeme == "(":
            return Token.left_parenthesis()
        if lexeme == ")":
            return Token.right_parenthesis()
        if lexeme == ",":
            return Token.argument_separator()
        if lexeme in SIGNS:
            prefix, binary = SIGNS[lexeme]
            return Token.operation(prefix if self._expects_operand(previous) else binary)
        return Token.operation(SYMBOLS[lexeme])
