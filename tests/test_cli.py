import io
import os
import unittest
from unittest.mock import Mock, patch

from factorial_engine.__main__ import (
    compute_and_report,
    interactive,
    main,
    parse_input,
    render_menu,
)
from factorial_engine.engine import FactorialEngine
from factorial_engine.exceptions import InvalidInputError, NegativeArgumentError
from factorial_engine.models import EngineSettings, FactorialMethod


class TestParseInput(unittest.TestCase):
    def test_parses_integers(self):
        self.assertEqual(parse_input("10"), 10)
        self.assertEqual(parse_input("  -3\n"), -3)

    def test_rejects_non_integers(self):
        for text in ("ten", "1.5", "", None):
            with self.subTest(text=text):
                with self.assertRaises(InvalidInputError):
                    parse_input(text)


class TestComputeAndReport(unittest.TestCase):
    def setUp(self):
        self.engine = FactorialEngine(EngineSettings(processor_count=2))
        self.out = io.StringIO()

    def test_prints_scientific_result(self):
        compute_and_report(self.engine, "10", FactorialMethod.FOR_LOOP, None, 3, self.out)
        self.assertTrue(self.out.getvalue().startswith("10! = 3.629E+6 in "))

    def test_negative_input_raises_negative_argument(self):
        with self.assertRaises(NegativeArgumentError):
            compute_and_report(self.engine, "-10", FactorialMethod.FOR_LOOP, None, 3, self.out)

    def test_approximation_is_flagged(self):
        compute_and_report(self.engine, "10", FactorialMethod.LOG_APPROXIMATION, None, 3, self.out)
        self.assertIn("approximated", self.out.getvalue())


class TestInteractive(unittest.TestCase):
    def setUp(self):
        self.engine = FactorialEngine(EngineSettings(processor_count=2))
        self.out = io.StringIO()

    def test_menu_lists_every_method(self):
        menu = render_menu()
        for method in FactorialMethod:
            self.assertIn(f"{method.menu_number}) ", menu)
        self.assertIn("0) Return to start screen", menu)

    def test_number_then_method_then_back(self):
        read = Mock(side_effect=["5", "1", "9", "0", ""])
        interactive(self.engine, None, 2, read=read, out=self.out)
        self.assertIn("5! = 1.20E+2 in ", self.out.getvalue())

    def test_error_returns_to_start(self):
        read = Mock(side_effect=["abc", "1", "6", "6", EOFError()])
        interactive(self.engine, None, 2, read=read, out=self.out)
        output = self.out.getvalue()
        self.assertIn("not a valid number", output)
        self.assertIn("6! = 7.20E+2 in ", output)

    def test_end_of_input_stops(self):
        read = Mock(side_effect=EOFError())
        interactive(self.engine, None, 2, read=read, out=self.out)
        self.assertEqual(self.out.getvalue(), "")


class TestMain(unittest.TestCase):
    def test_single_shot(self):
        out = io.StringIO()
        code = main(["12", "--method", "parallel", "--threads", "3", "--precision", "4"], out=out)
        self.assertEqual(code, 0)
        self.assertTrue(out.getvalue().startswith("12! = 4.7900E+8 in "))

    def test_auto_method(self):
        out = io.StringIO()
        self.assertEqual(main(["150"], out=out), 0)
        self.assertIn("150! = ", out.getvalue())

    def test_invalid_number_exit_code(self):
        out = io.StringIO()
        self.assertEqual(main(["twelve"], out=out), 1)
        self.assertIn("not a valid number", out.getvalue())

    def test_recursive_ceiling_exit_code(self):
        out = io.StringIO()
        self.assertEqual(main(["15001", "--method", "recursive"], out=out), 1)
        self.assertIn("15000", out.getvalue())

    def test_unknown_method_exits(self):
        with self.assertRaises(SystemExit):
            main(["5", "--method", "bogus"], out=io.StringIO())

    def test_bad_threads_exits(self):
        with self.assertRaises(SystemExit):
            main(["5", "--threads", "0"], out=io.StringIO())

    @patch.dict(os.environ, {"FACTORIAL_PROCESSOR_COUNT": "abc"})
    def test_invalid_environment_settings_exit_code(self):
        out = io.StringIO()
        self.assertEqual(main(["5"], out=out), 1)
        self.assertIn("Invalid FACTORIAL_* settings", out.getvalue())
        self.assertIn("processor_count", out.getvalue())


if __name__ == '__main__':
    unittest.main()
