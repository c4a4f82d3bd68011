"""
Factorial Strategies

Concrete implementations of IFactorialStrategy. Arbitrary-precision
multiplication is the expensive operation, so most strategies try to do
fewer of them: by batching small factors in unsigned 64-bit arithmetic, by
pairing small factors with large ones, or by spreading the work over a
thread pool.
"""

import logging
import math
from concurrent.futures import Future, ThreadPoolExecutor
from decimal import Decimal
from typing import List, Optional

import numpy as np

from .exceptions import RangeCeilingExceededError
from .interfaces import IFactorialStrategy
from .partial_products import (
    fold_product,
    partial_product_by_list,
    partial_product_by_range,
    premultiply_ends,
    premultiply_ends_parallel,
    safe_group_size,
    safe_premultiply_passes,
)


logger = logging.getLogger(__name__)


class ForLoopFactorial(IFactorialStrategy):
    """
    Plain iterative product of 2..n.

    This is the reference every other exact strategy is compared against.
    """

    def compute_factorial(self, n: int) -> int:
        """
        Compute n! with a single loop.

        Examples:
            >>> ForLoopFactorial().compute_factorial(5)
            120
        """
        self.validate(n)
        result = 1
        for i in range(2, n + 1):
            result *= i
        return result


class PreMultiplyFactorial(IFactorialStrategy):
    """
    Multiplies consecutive factors in groups using uint64 arithmetic and
    only then folds the group products into an arbitrary-precision total.

    With the default group size of 4, 40000*39999*39998*39997 still fits in
    an unsigned 64-bit integer. Larger n lowers the group size per call.
    """

    def __init__(self, group_size: int = 4):
        if group_size < 1:
            raise ValueError("group_size must be at least 1")
        self.group_size = group_size

    def compute_factorial(self, n: int) -> int:
        self.validate(n)
        if n < 2:
            return 1
        k = safe_group_size(n, self.group_size)
        factors = np.arange(1, n + 1, dtype=np.uint64)
        padding = (-n) % k
        if padding:
            factors = np.concatenate([factors, np.ones(padding, dtype=np.uint64)])
        groups = factors.reshape(-1, k).prod(axis=1, dtype=np.uint64)
        return fold_product(groups)


class PreMultiplyEndsFactorial(IFactorialStrategy):
    """
    Pairs the lowest remaining factor with the highest one (1*n, 2*(n-1), ...)
    in uint64 arithmetic, repeats the pairing on the result, then folds.

    Two passes put at most four factors into each element, which is safe
    for n up to 65535. Above that the pass count is lowered per call.
    """

    def __init__(self, passes: int = 2):
        if passes < 0:
            raise ValueError("passes must not be negative")
        self.passes = passes

    def paired_values(self, n: int) -> np.ndarray:
        values = np.arange(1, n + 1, dtype=np.uint64)
        for _ in range(safe_premultiply_passes(n, self.passes)):
            values = premultiply_ends(values)
        return values

    def compute_factorial(self, n: int) -> int:
        self.validate(n)
        return fold_product(self.paired_values(n))


class _ForkJoinMixin:
    """Thread count selection and fork-join folding for the parallel strategies."""

    processor_count: int

    def thread_count(self, n: int, parallelism_hint: Optional[int] = None) -> int:
        workers = parallelism_hint if parallelism_hint is not None else self.processor_count
        return max(1, min(workers, n))

    @staticmethod
    def join_product(futures: List[Future]) -> int:
        # every partial must finish before folding; order does not change the product
        partials = [future.result() for future in futures]
        total = 1
        for partial in partials:
            total *= partial
        return total


class ParallelFactorial(_ForkJoinMixin, IFactorialStrategy):
    """
    Splits 1..n into ``threads`` residue classes (1, 1+t, 1+2t, ...;
    2, 2+t, ...) and multiplies each class on its own worker thread.
    """

    def __init__(self, processor_count: int = 1):
        if processor_count < 1:
            raise ValueError("processor_count must be at least 1")
        self.processor_count = processor_count

    def compute_factorial(self, n: int, parallelism_hint: Optional[int] = None) -> int:
        self.validate(n)
        if n < 2:
            return 1

        threads = self.thread_count(n, parallelism_hint)
        logger.debug("Parallel factorial of %d on %d threads", n, threads)
        with ThreadPoolExecutor(max_workers=threads) as executor:
            futures = [
                executor.submit(partial_product_by_range, t, n, threads)
                for t in range(1, threads + 1)
            ]
            return self.join_product(futures)


class ParallelPreMultiplyEndsFactorial(_ForkJoinMixin, IFactorialStrategy):
    """
    Paired-ends pre-multiplication with the pairing split across threads,
    followed by a strided product of the paired list on each thread.
    """

    def __init__(self, processor_count: int = 1, passes: int = 2):
        if processor_count < 1:
            raise ValueError("processor_count must be at least 1")
        if passes < 0:
            raise ValueError("passes must not be negative")
        self.processor_count = processor_count
        self.passes = passes

    def compute_factorial(self, n: int, parallelism_hint: Optional[int] = None) -> int:
        self.validate(n)
        if n < 2:
            return 1

        threads = self.thread_count(n, parallelism_hint)
        values = np.arange(1, n + 1, dtype=np.uint64)
        for _ in range(safe_premultiply_passes(n, self.passes)):
            values = premultiply_ends_parallel(values, threads)

        logger.debug(
            "Parallel pre-multiply-ends factorial of %d: %d paired values on %d threads",
            n, len(values), threads,
        )
        with ThreadPoolExecutor(max_workers=threads) as executor:
            futures = [
                executor.submit(partial_product_by_list, values, offset, threads)
                for offset in range(threads)
            ]
            return self.join_product(futures)


class RecursiveFactorial(IFactorialStrategy):
    """
    n! = n * (n-1)!, with 0! = 1.

    The recursion is unwound on an explicit stack of pending frames, so the
    depth is limited by ``ceiling`` rather than by the interpreter's
    recursion limit. It is the slowest strategy at scale and exists for
    comparison.
    """

    def __init__(self, ceiling: int = 15000):
        self.ceiling = ceiling

    def compute_factorial(self, n: int) -> int:
        self.validate(n)
        if n > self.ceiling:
            raise RangeCeilingExceededError(n, self.ceiling)

        # descend: each frame waits for f(k - 1)
        pending = []
        k = n
        while k != 0:
            pending.append(k)
            k -= 1

        # base case, then return up through the frames
        result = 1
        while pending:
            result = pending.pop() * result
        return result


class LogApproximationFactorial(IFactorialStrategy):
    """
    Approximates n! from log10(n!) = sum(log10(i)).

    The integer part of the sum is the decimal exponent, the fractional part
    gives a mantissa rounded to 5 decimals. Only about 5 significant digits
    of the result are meaningful.
    """

    exact = False
    MANTISSA_DECIMALS = 5

    def compute_factorial(self, n: int) -> int:
        self.validate(n)

        total = math.fsum(map(math.log10, range(1, n + 1)))

        exponent = int(total)
        mantissa = round(10 ** (total - exponent), self.MANTISSA_DECIMALS)
        return self.scale_mantissa(mantissa, exponent)

    @staticmethod
    def scale_mantissa(mantissa: float, exponent: int) -> int:
        """
        Integer value of the decimal literal ``<mantissa>E+<exponent>``.

        The mantissa is read back through its shortest decimal repr, so
        2.09169 scales as exactly 209169 * 10**(exponent - 5). Digits that
        would land after the decimal point are truncated.
        """
        _, digits, digits_exponent = Decimal(repr(mantissa)).as_tuple()
        coefficient = int("".join(map(str, digits)))
        shift = digits_exponent + exponent
        if shift >= 0:
            return coefficient * 10 ** shift
        return coefficient // 10 ** (-shift)
