"""In-memory variable table."""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from expression_evaluator.engine.values import Scalar, VariableStore


class VariableTable(BaseModel, VariableStore):
    """Name -> value bindings shared by every expression of a session."""

    bindings: Dict[str, Scalar] = Field(default_factory=dict, description="Current bindings")

    def lookup(self, name: str) -> Optional[Scalar]:
        return self.bindings.get(name)

    def bind(self, name: str, value: Scalar) -> None:
        self.bindings[name] = value

    def names(self) -> List[str]:
        return sorted(self.bindings)

    def clear(self) -> None:
        self.bindings.clear()

    def snapshot(self) -> Dict[str, Scalar]:
        """Copy of the current bindings, for restore()."""
        return dict(self.bindings)

    def restore(self, bindings: Dict[str, Scalar]) -> None:
        """Replace every binding with those of an earlier snapshot."""
        self.bindings.clear()
        self.bindings.update(bindings)
