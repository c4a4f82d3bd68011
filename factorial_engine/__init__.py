"""
Factorial Engine

Computes n! with interchangeable strategies that trade accuracy, memory and
speed: a plain loop, 64-bit pre-multiplication, paired-ends
pre-multiplication, two thread-pool variants, recursion and a logarithmic
approximation.
"""

from .engine import FactorialEngine, choose_method
from .exceptions import (
    FactorialError,
    FactorialRangeError,
    InvalidIncrementError,
    InvalidParallelismError,
    InvalidInputError,
    NegativeArgumentError,
    OutOfOrderRangeError,
    RangeCeilingExceededError,
    UnknownMethodError,
)
from .formatting import format_scientific
from .interfaces import IFactorialStrategy
from .models import EngineSettings, FactorialMethod, FactorialRequest, FactorialResult
from .partial_products import (
    partial_product_by_list,
    partial_product_by_range,
    premultiply_ends,
    premultiply_ends_parallel,
)

__all__ = [
    "FactorialEngine",
    "choose_method",
    "FactorialError",
    "FactorialRangeError",
    "InvalidIncrementError",
    "InvalidParallelismError",
    "InvalidInputError",
    "NegativeArgumentError",
    "OutOfOrderRangeError",
    "RangeCeilingExceededError",
    "UnknownMethodError",
    "format_scientific",
    "IFactorialStrategy",
    "EngineSettings",
    "FactorialMethod",
    "FactorialRequest",
    "FactorialResult",
    "partial_product_by_list",
    "partial_product_by_range",
    "premultiply_ends",
    "premultiply_ends_parallel",
]

__version__ = "1.0.0"
