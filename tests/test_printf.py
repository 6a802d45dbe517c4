import unittest

from yarnball.printf import sprintf
from yarnball.diagnostics import FormatError

class FormatTests(unittest.TestCase):

	def test_strings(self):
		for template, args, expect in [
			("Hello, %s!", ["World"], "Hello, World!"),
			("%5s|", ["ab"], "   ab|"),
			("%-5s|", ["ab"], "ab   |"),
			("%'*6s", ["ab"], "****ab"),
			("%.3s", ["abcdef"], "abc"),
			("%s %s", [True, None], "1 "),
			("%s", [1.0], "1"),
			("no directives", [], "no directives"),
			("100%%", [], "100%"),
		]:
			with self.subTest(template):
				self.assertEqual(expect, sprintf(template, args))

	def test_integers(self):
		for template, args, expect in [
			("%d", [42], "42"),
			("%d", ["12 apples"], "12"),
			("%d", [3.99], "3"),
			("%+d %+d", [5, -5], "+5 -5"),
			("%05d", [42], "00042"),
			("%+05d", [-3], "-0003"),
			("%-05d|", [42], "42   |"),
			("%u", [-1], "18446744073709551615"),
			("%b %o %x %X", [5, 8, 255, 255], "101 10 ff FF"),
			("%x", [-1], "ffffffffffffffff"),
			("%c%c", [65, 321], "AA"),
		]:
			with self.subTest(template, args=args):
				self.assertEqual(expect, sprintf(template, args))

	def test_floats(self):
		for template, args, expect in [
			("%f", [1.5], "1.500000"),
			("%F", [-1.5], "-1.500000"),
			("%.2f", [3.14159], "3.14"),
			("%10.4f", [3.14159], "    3.1416"),
			("%5.1f", ["-2.5"], " -2.5"),
			("%e", [1500], "1.500000e+3"),
			("%.2e", [1500], "1.50e+3"),
			("%E", [1500], "1.500000E+3"),
			("%g", [0.00001234], "1.234e-5"),
			("%G", [0.00001234], "1.234E-5"),
			("%g", [100000], "100000"),
		]:
			with self.subTest(template, args=args):
				self.assertEqual(expect, sprintf(template, args))

	def test_argument_numbers(self):
		self.assertEqual("a b a", sprintf("%1$s %2$s %1$s", ["a", "b"]))
		self.assertEqual("b a", sprintf("%2$s %s", ["a", "b"]))
		self.assertEqual("  007", sprintf("%1$5s", ["007"]))

	def test_errors(self):
		for template, args, message in [
			("%s %s", ["a"], "3 arguments are required, 2 given"),
			("%2$s", ["a"], "3 arguments are required, 2 given"),
			("%0$s", ["a"], "Argument number must be greater than zero"),
			("100%", [], "Missing format specifier at end of string"),
			("%y", [1], "Unknown format specifier 'y'"),
		]:
			with self.subTest(template):
				with self.assertRaises(FormatError) as cm:
					sprintf(template, args)
				self.assertEqual(message, str(cm.exception))


if __name__ == '__main__':
	unittest.main()
