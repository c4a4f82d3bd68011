"""Exception hierarchy for the factorial engine.

Every error is raised before any multiplication starts, so a failed call
never leaves partial work behind.
"""


class FactorialError(Exception):
    """Base class for all errors raised by the factorial engine."""


class InvalidInputError(FactorialError, ValueError):
    """The provided text does not parse as an integer."""


class FactorialRangeError(FactorialError, ValueError):
    """An argument lies outside the range a computation accepts."""


class NegativeArgumentError(FactorialRangeError):
    """A negative number was given where only n >= 0 is defined."""

    def __init__(self, name: str = "n", value: int = -1):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a non-negative number, got {value}")


class RangeCeilingExceededError(FactorialRangeError):
    """n is above the ceiling a strategy is allowed to handle."""

    def __init__(self, value: int, ceiling: int):
        self.value = value
        self.ceiling = ceiling
        super().__init__(
            f"{ceiling} is the maximum supported n in the recursive strategy, got {value}"
        )


class OutOfOrderRangeError(FactorialRangeError):
    """The end of a range is smaller than its start."""

    def __init__(self, start_index: int, end_value: int):
        self.start_index = start_index
        self.end_value = end_value
        super().__init__(
            f"end value {end_value} must not be smaller than start index {start_index}"
        )


class InvalidIncrementError(FactorialError, ValueError):
    """A partial product was requested with a step smaller than 1."""

    def __init__(self, increment: int):
        self.increment = increment
        super().__init__(f"increment must be 1 or greater, got {increment}")


class InvalidParallelismError(FactorialError, ValueError):
    """A parallel computation was asked to use fewer than one worker."""

    def __init__(self, parallelism: int):
        self.parallelism = parallelism
        super().__init__(f"parallelism must be 1 or greater, got {parallelism}")


class UnknownMethodError(FactorialError, ValueError):
    """No strategy is registered for the requested method."""
