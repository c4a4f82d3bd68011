"""Scientific-notation rendering of very large integers.

Python refuses to convert integers with more than a few thousand digits to
``str`` by default, so the leading digits are extracted with integer
arithmetic and only those are turned into text.
"""

import math

_LOG10_2 = math.log10(2)


def decimal_exponent(value: int) -> int:
    """Return ``floor(log10(value))`` for a positive integer, exactly."""
    if value <= 0:
        raise ValueError("decimal_exponent is only defined for positive integers")
    exponent = int((value.bit_length() - 1) * _LOG10_2)
    # the float estimate can be off by one in either direction
    while 10 ** (exponent + 1) <= value:
        exponent += 1
    while 10 ** exponent > value:
        exponent -= 1
    return exponent


def format_scientific(value: int, precision: int = 15) -> str:
    """Format a non-negative integer as ``d.ddd...E+x``.

    Args:
        value: Integer to format, typically a factorial.
        precision: Digits after the decimal point. The last one is rounded
            half away from zero.

    Returns:
        str: For example ``format_scientific(3628800, 3)`` gives ``"3.629E+6"``.

    Raises:
        ValueError: If ``value`` or ``precision`` is negative.
    """
    if precision < 0:
        raise ValueError("precision must be non-negative")
    if value < 0:
        raise ValueError("format_scientific only handles non-negative integers")
    if value == 0:
        mantissa = "0"
        exponent = 0
    else:
        exponent = decimal_exponent(value)
        dropped = exponent - precision
        if dropped > 0:
            scale = 10 ** dropped
            head, rest = divmod(value, scale)
            if 2 * rest >= scale:
                head += 1
                if head == 10 ** (precision + 1):
                    head //= 10
                    exponent += 1
        else:
            head = value * 10 ** (-dropped)
        mantissa = str(head)

    if precision == 0:
        return f"{mantissa[0]}E+{exponent}"
    fraction = mantissa[1:].ljust(precision, "0")
    return f"{mantissa[0]}.{fraction}E+{exponent}"
