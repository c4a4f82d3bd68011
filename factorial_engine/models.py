"""Pydantic models for the factorial engine: method tags, settings and results."""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .exceptions import UnknownMethodError
from .formatting import format_scientific


class FactorialMethod(str, Enum):
    """Strategy tags understood by the engine.

    The declaration order matches the numbered menu of the interactive CLI.
    """

    FOR_LOOP = "for_loop"
    FOR_LOOP_PRE_MULTIPLY = "for_loop_pre_multiply"
    FOR_LOOP_PRE_MULTIPLY_ENDS = "for_loop_pre_multiply_ends"
    PARALLEL = "parallel"
    PARALLEL_PRE_MULTIPLY_ENDS = "parallel_pre_multiply_ends"
    RECURSIVE = "recursive"
    LOG_APPROXIMATION = "log_approximation"

    @property
    def menu_number(self) -> int:
        return list(FactorialMethod).index(self) + 1

    @property
    def is_exact(self) -> bool:
        return self is not FactorialMethod.LOG_APPROXIMATION

    @classmethod
    def from_menu_number(cls, number: int) -> "FactorialMethod":
        """Return the method listed under ``number`` in the CLI menu.

        Raises:
            UnknownMethodError: If ``number`` is outside 1..7.
        """
        methods = list(cls)
        if not 1 <= number <= len(methods):
            raise UnknownMethodError(f"No method is listed under menu entry {number}")
        return methods[number - 1]

    @classmethod
    def parse(cls, name: str) -> "FactorialMethod":
        """Parse a method name, accepting dashes as well as underscores."""
        try:
            return cls(name.strip().lower().replace("-", "_"))
        except ValueError:
            raise UnknownMethodError(f"Unknown factorial method: {name!r}") from None


def _default_processor_count() -> int:
    return os.cpu_count() or 1


class EngineSettings(BaseModel):
    """Tuning knobs of the factorial engine.

    The pre-multiply constants are sized for n near 40000, where the product
    of four factors still fits in an unsigned 64-bit integer. The strategies
    lower them per call when n is larger, so they act as upper limits.

    Attributes:
        processor_count: Number of worker threads for the parallel strategies.
        premultiply_group_size: Factors multiplied together in 64-bit
            arithmetic before touching arbitrary precision.
        premultiply_passes: How many times the paired-ends step is applied.
        recursion_ceiling: Largest n the recursive strategy accepts.
        approximation_threshold: Above this n the dispatcher approximates.
        parallel_ends_threshold: Above this n the dispatcher uses the
            parallel paired-ends strategy.
        parallel_threshold: Above this n the dispatcher uses the parallel strategy.
        premultiply_threshold: Above this n the dispatcher pre-multiplies.
    """

    model_config = {"frozen": True}

    processor_count: int = Field(default_factory=_default_processor_count, ge=1)
    premultiply_group_size: int = Field(4, ge=1, description="Factors per 64-bit group")
    premultiply_passes: int = Field(2, ge=0, description="Paired-ends passes")
    recursion_ceiling: int = Field(15000, ge=0, description="Largest n for the recursive strategy")
    approximation_threshold: int = Field(40000, ge=0)
    parallel_ends_threshold: int = Field(1000, ge=0)
    parallel_threshold: int = Field(500, ge=0)
    premultiply_threshold: int = Field(100, ge=0)

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from ``FACTORIAL_*`` environment variables.

        Unset variables fall back to the field defaults.
        """
        env_names = {
            "processor_count": "FACTORIAL_PROCESSOR_COUNT",
            "premultiply_group_size": "FACTORIAL_GROUP_SIZE",
            "premultiply_passes": "FACTORIAL_PREMULTIPLY_PASSES",
            "recursion_ceiling": "FACTORIAL_RECURSION_CEILING",
        }
        values = {}
        for field_name, env_name in env_names.items():
            raw = os.getenv(env_name)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        return cls(**values)


class FactorialRequest(BaseModel):
    """A single factorial computation request.

    Attributes:
        n: Non-negative integer to take the factorial of.
        method: Strategy to use; None lets the dispatcher choose.
        parallelism: Worker count override for the parallel strategies.
    """

    n: int = Field(..., ge=0, description="Non-negative integer")
    method: Optional[FactorialMethod] = Field(None, description="Strategy, None for automatic")
    parallelism: Optional[int] = Field(None, ge=1, description="Worker threads override")

    @field_validator("method", mode="before")
    @classmethod
    def parse_method(cls, v):
        if isinstance(v, str) and v.strip().lower() == "auto":
            return None
        if isinstance(v, str):
            return FactorialMethod.parse(v)
        return v


class FactorialResult(BaseModel):
    """Outcome of a timed factorial computation."""

    n: int
    method: FactorialMethod
    value: int
    elapsed_ms: float = Field(..., ge=0)

    @property
    def approximate(self) -> bool:
        return not self.method.is_exact

    def scientific(self, precision: int = 15) -> str:
        """Format the value as ``d.ddd...E+x`` with ``precision`` decimals."""
        return format_scientific(self.value, precision)

    def __str__(self) -> str:
        return f"{self.n}! = {self.scientific()} in {self.elapsed_ms:.0f}ms"
