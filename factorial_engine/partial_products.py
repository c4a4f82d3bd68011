"""
Partial Product Helpers

Building blocks shared by the factorial strategies: products over strided
integer ranges, products over strided slices of a 64-bit value list, and the
paired-ends pre-multiplication that shrinks a list of small factors into a
shorter list of larger ones without leaving unsigned 64-bit arithmetic.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence, Union

import numpy as np

from .exceptions import (
    InvalidIncrementError,
    NegativeArgumentError,
    OutOfOrderRangeError,
)


logger = logging.getLogger(__name__)

UINT64_MAX = int(np.iinfo(np.uint64).max)

ValueList = Union[np.ndarray, Sequence[int]]


def partial_product_by_range(start_index: int, end_value: int, increment: int = 1) -> int:
    """
    Multiply every ``increment``-th integer of an inclusive range.

    A start of 0 is treated as 1, since 0 is never a meaningful factor.

    Args:
        start_index (int): First value of the series, >= 0.
        end_value (int): Last value of the series, >= start_index.
        increment (int): Distance between consecutive factors, >= 1.

    Returns:
        int: The product, or 1 for an empty series.

    Raises:
        InvalidIncrementError: If increment < 1.
        NegativeArgumentError: If start_index < 0.
        OutOfOrderRangeError: If end_value < start_index.

    Examples:
        >>> partial_product_by_range(3, 8, 2)
        105
    """
    if increment < 1:
        raise InvalidIncrementError(increment)
    if start_index < 0:
        raise NegativeArgumentError("start_index", start_index)
    if end_value < start_index:
        raise OutOfOrderRangeError(start_index, end_value)

    if start_index == 0:
        start_index = 1

    total = 1
    for i in range(start_index, end_value + 1, increment):
        total *= i
    return total


def partial_product_by_list(values: ValueList, start_index: int, increment: int = 1) -> int:
    """
    Multiply the elements at ``start_index``, ``start_index + increment``, ...

    Args:
        values: Zero-based list of unsigned 64-bit values.
        start_index (int): Index of the first factor.
        increment (int): Distance between consecutive indices, >= 1.

    Returns:
        int: Arbitrary-precision product; 1 when start_index is negative or
        past the end of ``values``.

    Raises:
        InvalidIncrementError: If increment < 1.
    """
    if increment < 1:
        raise InvalidIncrementError(increment)
    if start_index < 0 or start_index >= len(values):
        return 1

    total = 1
    for value in values[start_index::increment]:
        # numpy scalars would pull the accumulator down to wrapping uint64
        total *= int(value)
    return total


def fold_product(values: ValueList) -> int:
    """Multiply all values into an arbitrary-precision integer, left to right."""
    return partial_product_by_list(values, 0, 1)


def _even_length(values: ValueList) -> np.ndarray:
    values = np.asarray(values, dtype=np.uint64)
    if len(values) % 2 == 1:
        values = np.append(values, np.uint64(1))
    return values


def premultiply_ends(values: ValueList) -> np.ndarray:
    """
    Pair the front of a list with its back and multiply each pair.

    An odd-length list is padded with a trailing 1 first. Element ``i`` of
    the result is ``values[i] * values[len - 1 - i]``. The caller guarantees
    that every pairwise product fits in an unsigned 64-bit integer; numpy
    wraps silently otherwise.

    Args:
        values: Unsigned 64-bit factors.

    Returns:
        np.ndarray: uint64 array of half the (padded) length.
    """
    values = _even_length(values)
    half = len(values) // 2
    return values[:half] * values[::-1][:half]


def premultiply_ends_parallel(values: ValueList, workers: int) -> np.ndarray:
    """
    Same result as :func:`premultiply_ends`, with the pairing split into
    ``workers`` contiguous chunks that run on a thread pool.

    Each chunk writes to its own slice of a preallocated output array, so
    the tasks never touch each other's data.
    """
    values = _even_length(values)
    count = len(values)
    half = count // 2
    result = np.empty(half, dtype=np.uint64)
    if half == 0:
        return result

    workers = max(1, min(workers, half))
    bounds = np.linspace(0, half, workers + 1, dtype=np.int64).tolist()

    def pair_chunk(lo: int, hi: int) -> None:
        # partners of lo..hi-1 are count-1-lo down to count-hi
        np.multiply(values[lo:hi], values[count - hi:count - lo][::-1], out=result[lo:hi])

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(pair_chunk, lo, hi) for lo, hi in zip(bounds, bounds[1:])]
        for future in futures:
            future.result()
    return result


def safe_group_size(n: int, group_size: int) -> int:
    """
    Largest group size <= ``group_size`` whose product stays within uint64.

    A group of ``k`` factors no larger than ``n`` is bounded by ``n ** k``.
    """
    k = max(1, group_size)
    while k > 1 and n ** k > UINT64_MAX:
        k -= 1
    if k != group_size:
        logger.debug("Group size lowered from %d to %d for n=%d", group_size, k, n)
    return k


def safe_premultiply_passes(n: int, passes: int) -> int:
    """
    Largest pass count <= ``passes`` whose products stay within uint64.

    After ``p`` paired-ends passes every element is a product of at most
    ``2 ** p`` factors no larger than ``n``.
    """
    p = max(0, passes)
    while p > 0 and n ** (2 ** p) > UINT64_MAX:
        p -= 1
    if p != passes:
        logger.debug("Pre-multiply passes lowered from %d to %d for n=%d", passes, p, n)
    return p
