"""
Regular expressions in the delimited, Perl-compatible style: /body/modifiers.

The heavy lifting belongs to the `regex` package, which already speaks
nearly all of PCRE: POSIX classes, possessive quantifiers, atomic groups,
recursion, \\G, \\K, \\R and \\h all come for free. What it does not do is
peel off delimiters, read PCRE's single-letter modifiers, or agree with
PCRE about \\Z. So a pattern takes three steps on its way to the engine:

1. Split the delimiters from the body and the modifier letters.
2. Rewrite the few constructs where the two dialects disagree, plus the
   effects of modifiers that have no flag on the other side (U, D, A, n).
3. Compile, with the remaining modifiers as flags.

Each step can fail, and every failure is a RegexCompileError.
"""
from functools import lru_cache
from typing import NamedTuple, Optional

import regex

from .diagnostics import RegexCompileError

_BRACKETS = {"(": ")", "[": "]", "{": "}", "<": ">"}

_FLAGS = {
	"i": regex.IGNORECASE,
	"m": regex.MULTILINE,
	"s": regex.DOTALL,
	"x": regex.VERBOSE,
	"u": 0,  # Strings are always Unicode here.
	"J": 0,  # The engine tolerates duplicate group names anyway.
}
_REWRITTEN = "UDAn"
_IGNORED = " \n\r"

_COUNTED = regex.compile(r"\{\d+(?:,\d*)?\}")

class Delimited(NamedTuple):
	""" A pattern taken apart; `offset` is where the body starts in the original. """
	body: str
	modifiers: str
	offset: int

def split_delimiters(pattern:str) -> Delimited:
	start = len(pattern) - len(pattern.lstrip())
	if start == len(pattern):
		raise RegexCompileError(pattern, "Empty regular expression")
	opener = pattern[start]
	if opener.isalnum() or opener == "\\":
		raise RegexCompileError(pattern, "Delimiter must not be alphanumeric or backslash", start)
	closer = _BRACKETS.get(opener, opener)
	depth, i = 1, start + 1
	while i < len(pattern):
		ch = pattern[i]
		if ch == "\\":
			i += 2
			continue
		if ch == closer:
			depth -= 1
			if not depth: break
		elif ch == opener:
			depth += 1
		i += 1
	else:
		raise RegexCompileError(pattern, "No ending delimiter %r found" % closer)
	return Delimited(pattern[start+1:i], pattern[i+1:], start+1)


class _Rewriter:
	"""
	A single left-to-right pass over a pattern body, which copies what both
	dialects agree on and rewrites the rest. It must know just enough about
	the syntax to tell escapes, classes, groups, quantifiers and comments apart.
	"""
	def __init__(self, body:str, modifiers:str):
		self.body = body
		self.ungreedy = "U" in modifiers
		self.dollar_is_end = "D" in modifiers and "m" not in modifiers
		self.no_capture = "n" in modifiers
		self.extended = "x" in modifiers
		self.out = []
		self.i = 0

	def run(self) -> str:
		body = self.body
		while self.i < len(body):
			ch = body[self.i]
			if ch == "\\": self._escape()
			elif ch == "[": self._char_class()
			elif ch == "(": self._group()
			elif ch in "*+?": self._quantifier(ch)
			elif ch == "{" and _COUNTED.match(body, self.i): self._counted()
			elif ch == "$" and self.dollar_is_end: self._emit(r"\z", 1)
			elif ch == "#" and self.extended: self._comment()
			else: self._emit(ch, 1)
		return ''.join(self.out)

	def _emit(self, text:str, width:int):
		self.out.append(text)
		self.i += width

	def _escape(self):
		body, i = self.body, self.i
		nxt = body[i+1:i+2]
		if nxt == "Z":
			self._emit(r"(?=\n?\z)", 2)
		elif nxt == "Q":
			stop = body.find(r"\E", i+2)
			if stop < 0: stop = len(body)
			self._emit(regex.escape(body[i+2:stop]), stop + 2 - i)
		elif nxt == "E":
			self.i += 2  # Stray \E means nothing.
		else:
			self._emit(body[i:i+2], 2)

	def _char_class(self):
		body, j = self.body, self.i + 1
		if body[j:j+1] == "^": j += 1
		if body[j:j+1] == "]": j += 1
		while j < len(body) and body[j] != "]":
			if body[j] == "\\": j += 2
			elif body.startswith("[:", j):
				stop = body.find(":]", j+2)
				j = stop + 2 if stop >= 0 else j + 1
			else: j += 1
		self._emit(body[self.i:j+1], j+1-self.i)

	def _group(self):
		body, i = self.body, self.i
		if body.startswith("(?#", i):
			stop = body.find(")", i)
			stop = len(body) if stop < 0 else stop + 1
			self._emit(body[i:stop], stop - i)
		elif body.startswith("(?", i) or body.startswith("(*", i):
			self._emit(body[i:i+2], 2)
		elif self.no_capture:
			self._emit("(?:", 1)
		else:
			self._emit("(", 1)

	def _counted(self):
		self._quantifier(_COUNTED.match(self.body, self.i).group())

	def _quantifier(self, text:str):
		self._emit(text, len(text))
		follow = self.body[self.i:self.i+1]
		if follow == "+":
			self._emit("+", 1)
		elif follow == "?":
			self._emit("" if self.ungreedy else "?", 1)
		elif self.ungreedy:
			self.out.append("?")

	def _comment(self):
		stop = self.body.find("\n", self.i)
		stop = len(self.body) if stop < 0 else stop
		self._emit(self.body[self.i:stop], stop - self.i)


def translate(pattern:str) -> tuple[str, int]:
	""" Work out the engine's source text and flags for a delimited pattern """
	body, modifiers, offset = split_delimiters(pattern)
	flags = 0
	for letter in modifiers:
		if letter in _FLAGS: flags |= _FLAGS[letter]
		elif letter not in _REWRITTEN + _IGNORED:
			raise RegexCompileError(pattern, "Unknown modifier %r" % letter, offset + len(body) + 1 + modifiers.index(letter))
	source = _Rewriter(body, modifiers).run()
	if "A" in modifiers:
		source = r"\G(?:" + source + ("\n)" if "x" in modifiers else ")")
	return source, flags

@lru_cache(maxsize=256)
def compile_pattern(pattern:str):
	source, flags = translate(pattern)
	try:
		return regex.compile(source, flags | regex.VERSION0)
	except regex.error as ex:
		body, modifiers, offset = split_delimiters(pattern)
		position = offset + ex.pos if ex.pos is not None and source == body else None
		raise RegexCompileError(pattern, ex.msg, position) from ex

###############################################################################

def _groups(m, upto:int) -> list[str]:
	return [m.group(g) or "" for g in range(upto + 1)]

def _last_participant(m) -> int:
	for g in range(m.re.groups, 0, -1):
		if m.start(g) >= 0: return g
	return 0

def preg_match(subject:str, pattern:str) -> Optional[list[str]]:
	"""
	The first match, as the full text followed by each group.
	Groups that took no part are empty, and any at the end are left off.
	Returns None when nothing matches.
	"""
	m = compile_pattern(pattern).search(subject)
	if m is None:
		return None
	return _groups(m, _last_participant(m))

def preg_match_all(subject:str, pattern:str) -> Optional[list[list[str]]]:
	""" Every match, arranged group-major: [[all full matches], [all first groups], ...] """
	compiled = compile_pattern(pattern)
	found = [_groups(m, compiled.groups) for m in compiled.finditer(subject)]
	if not found:
		return None
	return [list(column) for column in zip(*found)]

_REFERENCE = regex.compile(r"\\([\\$])|[\\$](\d{1,2})|\$\{(\d{1,2})\}")

@lru_cache(maxsize=256)
def _template(replacement:str) -> tuple:
	"""
	Break a replacement into literal text and group numbers.
	\\n, $n and ${n} refer to groups; a backslash protects a following $ or \\.
	"""
	pieces, pos = [], 0
	for m in _REFERENCE.finditer(replacement):
		pieces.append(replacement[pos:m.start()])
		escaped, plain, braced = m.groups()
		pieces.append(escaped if escaped else int(plain or braced))
		pos = m.end()
	pieces.append(replacement[pos:])
	return tuple(p for p in pieces if p != "")

def _expander(pieces:tuple, width:int):
	def expand(m):
		return ''.join(
			((m.group(p) or "") if p <= width else "") if isinstance(p, int) else p
			for p in pieces
		)
	return expand

def preg_replace(subject:str, pattern:str, replacement:str, limit:int=-1) -> str:
	"""
	Replace matches of the pattern. A negative limit means no limit;
	otherwise at most that many replacements happen, from the left.
	"""
	compiled = compile_pattern(pattern)
	if limit == 0:
		return subject
	expand = _expander(_template(replacement), compiled.groups)
	return compiled.sub(expand, subject, count=max(0, limit))

def preg_split(subject:str, pattern:str, limit:int=-1) -> list[str]:
	"""
	Split around matches of the pattern. A positive limit caps the number
	of pieces, and the last piece then carries all the unsplit remainder.
	"""
	compiled = compile_pattern(pattern)
	pieces, pos = [], 0
	for m in compiled.finditer(subject):
		if 0 < limit <= len(pieces) + 1:
			break
		pieces.append(subject[pos:m.start()])
		pos = m.end()
	pieces.append(subject[pos:])
	return pieces
