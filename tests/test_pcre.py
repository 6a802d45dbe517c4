import unittest

import regex

from yarnball import pcre
from yarnball.diagnostics import RegexCompileError

class DelimiterTests(unittest.TestCase):

	def test_split_delimiters(self):
		for pattern, expect in [
			("/abc/i", ("abc", "i", 1)),
			("#a/b#", ("a/b", "", 1)),
			("  /a/", ("a", "", 3)),
			("[[a-c]+]", ("[a-c]+", "", 1)),
			("(x(y))m", ("x(y)", "m", 1)),
			("{a\\}}", ("a\\}", "", 1)),
			("/a\\/b/", ("a\\/b", "", 1)),
		]:
			with self.subTest(pattern):
				self.assertEqual(expect, tuple(pcre.split_delimiters(pattern)))

	def test_broken_delimiters(self):
		for pattern, message, position in [
			("", "Empty regular expression", None),
			("   ", "Empty regular expression", None),
			("abc", "Delimiter must not be alphanumeric or backslash", 0),
			("\\d+\\", "Delimiter must not be alphanumeric or backslash", 0),
			("/abc", "No ending delimiter '/' found", None),
			("(abc", "No ending delimiter ')' found", None),
		]:
			with self.subTest(pattern):
				with self.assertRaises(RegexCompileError) as cm:
					pcre.split_delimiters(pattern)
				self.assertEqual(pattern, cm.exception.pattern)
				self.assertEqual(message, cm.exception.message)
				self.assertEqual(position, cm.exception.position)


class TranslationTests(unittest.TestCase):

	def test_unknown_modifier(self):
		with self.assertRaises(RegexCompileError) as cm:
			pcre.translate("/a/iQ")
		self.assertEqual(4, cm.exception.position)
		self.assertEqual("/a/iQ\n    ^ Unknown modifier 'Q'", cm.exception.illustrate())

	def test_rewrites(self):
		for pattern, expect in [
			("/abc/", "abc"),
			("/a\\Z/", "a(?=\\n?\\z)"),
			("/a$/D", "a\\z"),
			("/a$/Dm", "a$"),
			("/a+b*?/U", "a+?b*"),
			("/a++/U", "a++"),
			("/a{2,}/U", "a{2,}?"),
			("/(a)(?:b)(?<c>d)/n", "(?:a)(?:b)(?<c>d)"),
			("/\\Qa.b\\E+/", "a\\.b+"),
			("/ab/A", "\\G(?:ab)"),
			("/[)(]/n", "[)(]"),
			("/[]*]/U", "[]*]"),
		]:
			with self.subTest(pattern):
				self.assertEqual(expect, pcre.translate(pattern)[0])

	def test_compiled_patterns_are_cached(self):
		self.assertIs(pcre.compile_pattern("/a+/i"), pcre.compile_pattern("/a+/i"))


class MatchTests(unittest.TestCase):

	def test_match(self):
		for subject, pattern, expect in [
			("For more information, see Chapter 3.4.5.1", r"/(chapter \d+(\.\d)*)/i", ["Chapter 3.4.5.1", "Chapter 3.4.5.1", ".1"]),
			("Grüße", "/ü(ß)/", ["üß", "ß"]),
			("a", "/(a)(x)?/", ["a", "a"]),
			("a", "/(x)?(a)/", ["a", "", "a"]),
			("Hello, World!", "/[[:^alnum:]]+/", [", "]),
			("nothing here", "/\\d/", None),
			("", "/^$/", [""]),
		]:
			with self.subTest(pattern=pattern):
				self.assertEqual(expect, pcre.preg_match(subject, pattern))

	def test_modifiers(self):
		for subject, pattern, expect in [
			("aaa", "/a+/U", ["a"]),
			("aaa", "/a+?/U", ["aaa"]),
			("aaaa", "/a{2,}/U", ["aa"]),
			("aaa", "/a++a/", None),
			("abc\n", "/c$/", ["c"]),
			("abc\n", "/c$/D", None),
			("abc\n", "/c$/mD", ["c"]),
			("abc\n", "/c\\Z/", ["c"]),
			("abc\n", "/c\\z/", None),
			("xab", "/ab/A", None),
			("abx", "/ab/A", ["ab"]),
			("ab", "/(a)(b)/n", ["ab"]),
			("abc", "/a b c # letters\n/x", ["abc"]),
			("abc", "/a # only a\n/Ax", ["a"]),
			("a.b*c", "/\\Qa.b*\\Ec/", ["a.b*c"]),
			("axbbc", "/\\Qa.b*\\Ec/", None),
			("xxabc", "[[a-c]+]", ["abc"]),
			("xy", "(x(y))", ["xy", "y"]),
			("A\nb", "/a.b/is", ["A\nb"]),
			("one\ntwo", "/^two/m", ["two"]),
		]:
			with self.subTest(pattern=pattern, subject=subject):
				self.assertEqual(expect, pcre.preg_match(subject, pattern))

	def test_match_all(self):
		html = "<b>example: </b><div align=left>this is a test</div>"
		for subject, pattern, expect in [
			(html, "|<[^>]+>(.*)</[^>]+>|U", [["<b>example: </b>", "<div align=left>this is a test</div>"], ["example: ", "this is a test"]]),
			("ab", "/(a)|(b)/", [["a", "b"], ["a", ""], ["", "b"]]),
			("icon-one icon-two", "/icon-(\\w+)/", [["icon-one", "icon-two"], ["one", "two"]]),
			("no icons", "/icon-(\\w+)/", None),
		]:
			with self.subTest(pattern=pattern):
				self.assertEqual(expect, pcre.preg_match_all(subject, pattern))


class ReplaceTests(unittest.TestCase):

	def test_replace(self):
		for args, expect in [
			(("2016-08-31", "/(\\d+)-(\\d+)-(\\d+)/", "$3.$2.$1"), "31.08.2016"),
			(("April 15, 2003", "/(\\w+) (\\d+), (\\d+)/i", "${1}1,$3"), "April1,2003"),
			(("hello world", "/(\\w+) (\\w+)/", "\\2 \\1"), "world hello"),
			(("Hello, World!", "/[[:^alnum:]]+/", "-"), "Hello-World-"),
			(("abc", "/b/", "[$1]"), "a[]c"),
			(("abc", "/(x)?b/", "[$1]"), "a[]c"),
			(("abc", "/b/", "[$0$0]"), "a[bb]c"),
			(("a", "/a/", "\\$1"), "$1"),
			(("a", "/a/", "\\\\"), "\\"),
			(("a", "/a/", "$"), "$"),
			(("aaa", "/a/", "b", 2), "bba"),
			(("aaa", "/a/", "b", 0), "aaa"),
			(("aaa", "/a/", "b", -1), "bbb"),
			(("aaa", "/z/", "b"), "aaa"),
		]:
			with self.subTest(args):
				self.assertEqual(expect, pcre.preg_replace(*args))


class SplitTests(unittest.TestCase):

	def test_split(self):
		for args, expect in [
			(("first second third", "/\\s+/", 2), ["first", "second third"]),
			(("first second third", "/\\s+/"), ["first", "second", "third"]),
			(("hypertext language, programming", "/[\\s,]+/"), ["hypertext", "language", "programming"]),
			(("a1b2c3", "/\\d/"), ["a", "b", "c", ""]),
			(("a1b2c3", "/\\d/", 1), ["a1b2c3"]),
			(("a1b2c3", "/\\d/", 0), ["a", "b", "c", ""]),
			(("a1b2c3", "/(\\d)/", 3), ["a", "b", "c3"]),
			(("", "/,/"), [""]),
		]:
			with self.subTest(args):
				self.assertEqual(expect, pcre.preg_split(*args))


class CompileErrorTests(unittest.TestCase):

	def test_every_operation_raises(self):
		for operation, args in [
			(pcre.preg_match, ("text", "/(unclosed/")),
			(pcre.preg_match_all, ("text", "/(unclosed/")),
			(pcre.preg_replace, ("text", "/(unclosed/", "x")),
			(pcre.preg_split, ("text", "/(unclosed/")),
			(pcre.preg_match, ("text", "/a/Q")),
			(pcre.preg_split, ("text", "abc")),
		]:
			with self.subTest(operation.__name__, args=args):
				with self.assertRaises(RegexCompileError) as cm:
					operation(*args)
				self.assertEqual(args[1], cm.exception.pattern)
				self.assertIn(args[1], str(cm.exception))

	def test_engine_diagnostic_comes_along(self):
		with self.assertRaises(RegexCompileError) as cm:
			pcre.preg_match("text", "/(unclosed/")
		self.assertIsInstance(cm.exception.__cause__, regex.error)
		self.assertEqual(cm.exception.__cause__.msg, cm.exception.message)
		position = cm.exception.position
		if position is not None:
			self.assertTrue(1 <= position <= len("/(unclosed/"))
		self.assertTrue(cm.exception.illustrate().startswith("/(unclosed/\n"))


if __name__ == '__main__':
	unittest.main()
