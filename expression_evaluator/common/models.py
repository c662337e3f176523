"""Pydantic models for expression evaluation requests and results."""
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from expression_evaluator.common.errors import ErrorKind


class OperationRequest(BaseModel):
    """Represents a single expression submitted for evaluation."""

    expression: str = Field(..., description="Expression text in infix notation")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class OperationResult(BaseModel):
    """Represents the result of an evaluated expression."""

    expression: str = Field(..., description="Original expression")
    result: str = Field(..., description="Rendered result value")
    kind: Literal["integer", "real", "boolean"] = Field(..., description="Type of the result value")

    def render(self) -> str:
        return f"{self.expression} = {self.result}"


class OperationError(BaseModel):
    """Represents an expression that could not be evaluated."""

    expression: str = Field(..., description="Original expression")
    error: str = Field(..., description="Human-readable error message")
    kind: ErrorKind = Field(..., description="Error taxonomy entry")

    def render(self) -> str:
        return f"{self.expression} -> ERROR: {self.error}"
