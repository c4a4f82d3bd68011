"""
Factorial Strategy Interface

This module defines the abstract contract shared by every factorial
strategy, so the engine can swap algorithms without changing callers.
"""

from abc import ABC, abstractmethod

from .exceptions import NegativeArgumentError


class IFactorialStrategy(ABC):
    """
    Abstract interface for factorial computation strategies.

    Implementations compute n! for a non-negative integer and must agree
    bit for bit with the plain loop, except for approximating strategies
    which set ``exact`` to False.
    """

    exact: bool = True

    @abstractmethod
    def compute_factorial(self, n: int) -> int:
        """
        Compute the factorial of a non-negative integer.

        Args:
            n (int): A non-negative integer (>= 0) for which to compute the factorial.

        Returns:
            int: The factorial of n (n!).

        Raises:
            NegativeArgumentError: If n is negative.
            TypeError: If n is not an integer.
        """
        pass

    @staticmethod
    def validate(n: int) -> None:
        """Reject non-integers (bool included) and negative numbers."""
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Expected an integer, got {type(n).__name__}")
        if n < 0:
            raise NegativeArgumentError("n", n)
