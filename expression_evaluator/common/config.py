"""Engine configuration."""
import sys

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRECISION = 1000
DEFAULT_POWER_THRESHOLD = 8

# Factorials and powers easily exceed the default int -> str conversion limit
sys.set_int_max_str_digits(0)


class EngineConfig(BaseModel):
    """Numeric settings shared by the evaluator and the session."""

    model_config = ConfigDict(frozen=True)

    precision: int = Field(default=DEFAULT_PRECISION, ge=1, description="Real working precision in significant digits")
    power_threshold: int = Field(
        default=DEFAULT_POWER_THRESHOLD,
        ge=0,
        description="Integral exponents above this use exponentiation by squaring",
    )
    guard_digits: int = Field(default=10, ge=0, description="Extra digits used by transcendental functions")
