import unittest

from factorial_engine.formatting import decimal_exponent, format_scientific


class TestDecimalExponent(unittest.TestCase):
    def test_powers_of_ten_boundaries(self):
        for k in (0, 1, 2, 15, 16, 300, 5000):
            with self.subTest(k=k):
                self.assertEqual(decimal_exponent(10 ** k), k)
                if k:
                    self.assertEqual(decimal_exponent(10 ** k - 1), k - 1)

    def test_non_positive_raises(self):
        with self.assertRaises(ValueError):
            decimal_exponent(0)


class TestFormatScientific(unittest.TestCase):
    def test_rounds_half_away_from_zero(self):
        self.assertEqual(format_scientific(3628800, 3), "3.629E+6")
        self.assertEqual(format_scientific(125, 1), "1.3E+2")
        self.assertEqual(format_scientific(124, 1), "1.2E+2")

    def test_rounding_carries_into_exponent(self):
        self.assertEqual(format_scientific(99999, 2), "1.00E+5")

    def test_pads_short_values(self):
        self.assertEqual(format_scientific(120, 5), "1.20000E+2")
        self.assertEqual(format_scientific(1, 3), "1.000E+0")

    def test_zero(self):
        self.assertEqual(format_scientific(0, 2), "0.00E+0")

    def test_zero_precision(self):
        self.assertEqual(format_scientific(3628800, 0), "4E+6")

    def test_values_beyond_str_digit_limit(self):
        """Formatting must not convert the whole integer to text."""
        self.assertEqual(format_scientific(10 ** 20000, 2), "1.00E+20000")
        self.assertEqual(format_scientific(7 * 10 ** 20000 + 1, 4), "7.0000E+20000")

    def test_negative_arguments_raise(self):
        with self.assertRaises(ValueError):
            format_scientific(-1)
        with self.assertRaises(ValueError):
            format_scientific(10, -1)


if __name__ == '__main__':
    unittest.main()
