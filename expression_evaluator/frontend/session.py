"""Evaluate expression text against shared variables and result history."""
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from expression_evaluator.common.config import EngineConfig
from expression_evaluator.common.errors import EvaluationError
from expression_evaluator.common.logger import logger
from expression_evaluator.common.models import OperationError, OperationRequest, OperationResult
from expression_evaluator.engine.converter import Converter
from expression_evaluator.engine.evaluator import Evaluator
from expression_evaluator.engine.values import Scalar, Value, dereference
from expression_evaluator.frontend.lexer import Lexer
from expression_evaluator.frontend.variables import VariableTable


class Session(BaseModel):
    """
    One user's sequence of expressions.

    Every expression goes lexer -> converter -> evaluator. Variables assigned by one
    expression are visible to the next, and each successful result is appended to
    the history read by the ``result(n)`` function.
    """

    config: EngineConfig = Field(default_factory=EngineConfig)
    variables: VariableTable = Field(default_factory=VariableTable)
    history: List[Scalar] = Field(default_factory=list, description="Results in evaluation order")

    def evaluate(self, text: str) -> Value:
        """
        Evaluate one expression.

        :param str text: Expression text

        :return: Result value; an assignment yields the assigned Variable
        :rtype: Value
        :raises EvaluationError: If the expression cannot be evaluated; its assignments are undone
        """
        bindings = self.variables.snapshot()
        try:
            tokens = Lexer(config=self.config, variables=self.variables).tokenize(text)
            postfix = Converter.convert(tokens)
            value = Evaluator(config=self.config, history=tuple(self.history)).evaluate(postfix)
            self.history.append(dereference(value))
        except EvaluationError as exc:
            self.variables.restore(bindings)
            logger.error("Could not evaluate %r: %s", text, exc)
            raise

        logger.info("%s = %s", text, self.history[-1].to_text(places=20))
        return value

    def run(self, request: OperationRequest, places: Optional[int] = None) -> Union[OperationResult, OperationError]:
        """
        Evaluate a request and describe the outcome instead of raising.

        :param OperationRequest request: Expression to evaluate
        :param places: Fractional digits used to render a Real result, the session precision by default

        :return: The rendered result, or the error that stopped the evaluation
        """
        try:
            self.evaluate(request.expression)
        except EvaluationError as exc:
            return OperationError(expression=request.expression, error=str(exc), kind=exc.kind)
        if places is None:
            places = self.config.precision
        value = self.history[-1]
        return OperationResult(expression=request.expression, result=value.to_text(places), kind=value.kind)
