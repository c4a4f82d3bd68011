"""
Factorial Engine

Dispatches a factorial request to one of the registered strategies and
times it. Also hosts the magnitude-based method selection used when the
caller does not pick a strategy.
"""

import logging
import time
from typing import Dict, Optional

from .exceptions import InvalidParallelismError, UnknownMethodError
from .interfaces import IFactorialStrategy
from .models import EngineSettings, FactorialMethod, FactorialRequest, FactorialResult
from .strategies import (
    ForLoopFactorial,
    LogApproximationFactorial,
    ParallelFactorial,
    ParallelPreMultiplyEndsFactorial,
    PreMultiplyEndsFactorial,
    PreMultiplyFactorial,
    RecursiveFactorial,
)


logger = logging.getLogger(__name__)

_PARALLEL_METHODS = (
    FactorialMethod.PARALLEL,
    FactorialMethod.PARALLEL_PRE_MULTIPLY_ENDS,
)


def choose_method(n: int, settings: Optional[EngineSettings] = None) -> FactorialMethod:
    """
    Pick a strategy from the magnitude of n.

    Thresholds are checked from largest to smallest; the first one that n
    exceeds wins. The defaults approximate above 40000, use the parallel
    paired-ends strategy above 1000, plain parallel above 500, pre-multiply
    above 100, and the plain loop otherwise.
    """
    settings = settings or EngineSettings()
    if n > settings.approximation_threshold:
        return FactorialMethod.LOG_APPROXIMATION
    if n > settings.parallel_ends_threshold:
        return FactorialMethod.PARALLEL_PRE_MULTIPLY_ENDS
    if n > settings.parallel_threshold:
        return FactorialMethod.PARALLEL
    if n > settings.premultiply_threshold:
        return FactorialMethod.FOR_LOOP_PRE_MULTIPLY
    return FactorialMethod.FOR_LOOP


class FactorialEngine:
    """
    Computes factorials through interchangeable strategies.

    The engine holds no state between calls besides its immutable settings
    and the strategy objects built from them, so concurrent calls are safe.

    Attributes:
        settings (EngineSettings): Tuning constants and processor count.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self._strategies: Dict[FactorialMethod, IFactorialStrategy] = {
            FactorialMethod.FOR_LOOP: ForLoopFactorial(),
            FactorialMethod.FOR_LOOP_PRE_MULTIPLY: PreMultiplyFactorial(
                self.settings.premultiply_group_size
            ),
            FactorialMethod.FOR_LOOP_PRE_MULTIPLY_ENDS: PreMultiplyEndsFactorial(
                self.settings.premultiply_passes
            ),
            FactorialMethod.PARALLEL: ParallelFactorial(self.settings.processor_count),
            FactorialMethod.PARALLEL_PRE_MULTIPLY_ENDS: ParallelPreMultiplyEndsFactorial(
                self.settings.processor_count, self.settings.premultiply_passes
            ),
            FactorialMethod.RECURSIVE: RecursiveFactorial(self.settings.recursion_ceiling),
            FactorialMethod.LOG_APPROXIMATION: LogApproximationFactorial(),
        }

    def strategy(self, method: FactorialMethod) -> IFactorialStrategy:
        """Return the strategy registered for ``method``."""
        try:
            return self._strategies[FactorialMethod(method)]
        except (KeyError, ValueError):
            raise UnknownMethodError(f"Unknown factorial method: {method!r}") from None

    def compute(
        self,
        n: int,
        method: FactorialMethod = FactorialMethod.FOR_LOOP,
        parallelism_hint: Optional[int] = None,
    ) -> int:
        """
        Compute n! with the selected strategy.

        Args:
            n (int): Non-negative integer.
            method (FactorialMethod): Strategy to use.
            parallelism_hint (Optional[int]): Worker count for the parallel
                strategies in place of the configured processor count.
                Ignored by the sequential strategies.

        Returns:
            int: n!, or its approximation for LOG_APPROXIMATION.

        Raises:
            NegativeArgumentError: If n is negative.
            RangeCeilingExceededError: If n is above the recursion ceiling
                and the recursive strategy was selected.
            UnknownMethodError: If no strategy matches ``method``.
            InvalidParallelismError: If parallelism_hint is below 1.
            TypeError: If n is not an integer.
        """
        strategy = self.strategy(method)
        if parallelism_hint is not None and parallelism_hint < 1:
            raise InvalidParallelismError(parallelism_hint)
        if method in _PARALLEL_METHODS:
            return strategy.compute_factorial(n, parallelism_hint=parallelism_hint)
        return strategy.compute_factorial(n)

    def run(self, request: FactorialRequest) -> FactorialResult:
        """
        Compute and time a request, choosing the method when none is given.

        Returns:
            FactorialResult: Value, method used and elapsed milliseconds.
        """
        method = request.method or choose_method(request.n, self.settings)
        if method is FactorialMethod.LOG_APPROXIMATION and request.method is None:
            logger.warning(
                "Values above %d are approximated to 5 significant digits",
                self.settings.approximation_threshold,
            )

        started = time.perf_counter()
        value = self.compute(request.n, method, request.parallelism)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info("Computed %d! with %s in %.3fms", request.n, method.value, elapsed_ms)
        # every field is produced here, so the huge value skips re-validation
        return FactorialResult.model_construct(
            n=request.n, method=method, value=value, elapsed_ms=elapsed_ms
        )
